"""The built-in catalog served by ``mcpedge serve``.

Three demonstration tools, two resources, two resource templates and three
prompts, plus the completion candidates for their arguments.
"""

from __future__ import annotations

import json
import math
import platform
import random
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import TYPE_CHECKING, Any

from mcpedge.protocol.errors import ToolExecutionError
from mcpedge.registry.models import (
    Annotations,
    CallToolResult,
    GetPromptResult,
    Prompt,
    PromptArgument,
    PromptMessage,
    ReadResourceResult,
    Resource,
    ResourceContents,
    ResourceTemplate,
    TextContent,
    Tool,
    ToolAnnotations,
)
from mcpedge.registry.registry import CapabilityRegistry, Clock, isoformat

if TYPE_CHECKING:
    from mcpedge.config.models import ServerConfig

URI_SCHEME = "mcpedge"
WORKER_INFO_URI = f"{URI_SCHEME}://worker-info"
CURRENT_TIME_URI = f"{URI_SCHEME}://current-time"
CONTENT_TEMPLATE_URI = f"{URI_SCHEME}://content/{{type}}/{{id}}"
STATUS_TEMPLATE_URI = f"{URI_SCHEME}://status/{{component}}"

LANGUAGES = ("English", "Spanish", "French", "German", "Italian", "Portuguese")
SEVERITIES = ("low", "medium", "high", "critical")
CONTENT_TYPES = ("user", "post", "comment", "file", "image", "document")
STATUS_COMPONENTS = ("memory", "cpu", "network", "storage", "database", "cache")

_BOTH = ["user", "assistant"]


def build_default_registry(
    config: ServerConfig,
    *,
    clock: Clock | None = None,
    rng: random.Random | None = None,
) -> CapabilityRegistry:
    """Return a registry populated with the built-in catalog for *config*."""
    registry = CapabilityRegistry(clock=clock)
    _register_tools(registry, rng or random.Random())
    _register_resources(registry, config)
    _register_templates(registry)
    _register_prompts(registry, config)
    return registry


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _number(value: float) -> int | float:
    """Render integral floats without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite(value: int | float) -> bool:
    """False for NaN, infinities and ints too large to fit a float."""
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _timezone_name(now: datetime) -> str:
    return now.astimezone().tzname() or "UTC"


def _locale_string(moment: datetime) -> str:
    """``M/D/YYYY, h:mm:ss AM`` in local time."""
    local = moment.astimezone()
    hour = local.hour % 12 or 12
    half = "AM" if local.hour < 12 else "PM"
    return f"{local.month}/{local.day}/{local.year}, {hour}:{local.minute:02d}:{local.second:02d} {half}"


def _compact_size(payload: dict[str, Any]) -> int:
    return len(json.dumps(payload, separators=(",", ":"), ensure_ascii=False))


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


def _register_tools(registry: CapabilityRegistry, rng: random.Random) -> None:
    registry.add_tool(
        Tool(
            name="get_time",
            title="Current Time",
            description="Get the current time in ISO format",
            output_schema={
                "type": "object",
                "properties": {
                    "timestamp": {"type": "string", "description": "ISO timestamp"},
                    "timezone": {"type": "string", "description": "Timezone info"},
                    "unix": {"type": "number", "description": "Unix timestamp"},
                },
                "required": ["timestamp"],
            },
            annotations=ToolAnnotations(
                title="Get Current Time",
                read_only_hint=True,
                destructive_hint=False,
                idempotent_hint=False,
                open_world_hint=False,
            ),
            meta={"category": "utility"},
        ),
        _get_time,
        timestamped=True,
    )
    registry.add_tool(
        Tool(
            name="echo",
            title="Echo Text",
            description="Echo back the input text",
            input_schema={
                "type": "object",
                "properties": {"text": {"type": "string", "description": "Text to echo back"}},
                "required": ["text"],
            },
            output_schema={
                "type": "object",
                "properties": {
                    "original": {"type": "string", "description": "The original text"},
                    "length": {"type": "number", "description": "Character count"},
                },
                "required": ["original"],
            },
            annotations=ToolAnnotations(
                title="Echo Input",
                read_only_hint=True,
                destructive_hint=False,
                idempotent_hint=True,
                open_world_hint=False,
            ),
        ),
        _echo,
    )

    def random_number(arguments: dict[str, Any], now: datetime) -> CallToolResult:
        low = arguments.get("min", 0)
        high = arguments.get("max", 100)
        if not (_is_number(low) and _is_number(high)):
            raise ToolExecutionError("min and max must be numbers")
        if not (_is_finite(low) and _is_finite(high) and _is_finite(high - low + 1)):
            raise ToolExecutionError("min and max must be finite and span a finite range")
        if low > high:
            raise ToolExecutionError("min must not be greater than max")
        value = _number(math.floor(rng.random() * (high - low + 1)) + low)
        low, high = _number(low), _number(high)
        return CallToolResult(
            content=[
                TextContent(
                    text=f"Random number between {low} and {high}: {value}",
                    annotations=Annotations(audience=_BOTH, priority=0.7),
                )
            ],
            structured_content={"value": value, "range": f"{low}-{high}"},
        )

    registry.add_tool(
        Tool(
            name="random_number",
            title="Random Number Generator",
            description="Generate a random number between min and max",
            input_schema={
                "type": "object",
                "properties": {
                    "min": {"type": "number", "description": "Minimum value"},
                    "max": {"type": "number", "description": "Maximum value"},
                },
                "required": ["min", "max"],
            },
            output_schema={
                "type": "object",
                "properties": {
                    "value": {"type": "number", "description": "The random number"},
                    "range": {"type": "string", "description": "The range used"},
                },
                "required": ["value"],
            },
            annotations=ToolAnnotations(
                title="Generate Random Number",
                read_only_hint=True,
                destructive_hint=False,
                idempotent_hint=False,
                open_world_hint=False,
            ),
        ),
        random_number,
    )


def _get_time(arguments: dict[str, Any], now: datetime) -> CallToolResult:
    stamp = isoformat(now)
    return CallToolResult(
        content=[
            TextContent(
                text=f"Current time: {stamp}",
                annotations=Annotations(audience=_BOTH, priority=1, last_modified=stamp),
            )
        ],
        structured_content={
            "timestamp": stamp,
            "timezone": _timezone_name(now),
            "unix": int(now.timestamp()),
        },
    )


def _echo(arguments: dict[str, Any], now: datetime) -> CallToolResult:
    text = arguments.get("text")
    if not text:
        raise ToolExecutionError("text parameter is required")
    if not isinstance(text, str):
        raise ToolExecutionError("text parameter must be a string")
    return CallToolResult(
        content=[
            TextContent(
                text=f"Echo: {text}",
                annotations=Annotations(audience=_BOTH, priority=0.8),
            )
        ],
        structured_content={"original": text, "length": len(text)},
    )


# ---------------------------------------------------------------------------
# Resources and templates
# ---------------------------------------------------------------------------


def _register_resources(registry: CapabilityRegistry, config: ServerConfig) -> None:
    def worker_info(uri: str, now: datetime) -> ReadResourceResult:
        info = {
            "name": config.name,
            "title": config.title,
            "version": config.version,
            "runtime": f"{platform.python_implementation()} {platform.python_version()}",
            "protocol": f"MCP {config.protocol_version}",
            "capabilities": ["tools", "resources", "prompts", "completions", "logging"],
            "features": {"stateless": True, "scalable": True},
        }
        return ReadResourceResult(
            contents=[
                ResourceContents(
                    uri=uri,
                    mime_type="application/json",
                    text=json.dumps(info, indent=2, ensure_ascii=False),
                    meta={"size": _compact_size(info), "encoding": "utf-8"},
                )
            ]
        )

    registry.add_resource(
        Resource(
            uri=WORKER_INFO_URI,
            name="worker-info",
            title="Worker Information",
            description="Information about this server process",
            mime_type="application/json",
            annotations=Annotations(audience=_BOTH, priority=0.9),
            size=500,
            meta={"category": "system", "readonly": True},
        ),
        worker_info,
        timestamped=True,
    )
    registry.add_resource(
        Resource(
            uri=CURRENT_TIME_URI,
            name="current-time",
            title="Current Server Time",
            description="Current server time in various formats",
            mime_type="application/json",
            annotations=Annotations(audience=_BOTH, priority=0.8),
            size=300,
            meta={"category": "utility", "dynamic": True},
        ),
        _current_time,
    )


def _current_time(uri: str, now: datetime) -> ReadResourceResult:
    local = now.astimezone()
    time_info = {
        "iso": isoformat(now),
        "unix": int(now.timestamp()),
        "formatted": _locale_string(now),
        "timezone": _timezone_name(now),
        "utc": format_datetime(now.astimezone(timezone.utc), usegmt=True),
        "components": {
            "year": local.year,
            "month": local.month,
            "day": local.day,
            "hour": local.hour,
            "minute": local.minute,
            "second": local.second,
        },
    }
    return ReadResourceResult(
        contents=[
            ResourceContents(
                uri=uri,
                mime_type="application/json",
                text=json.dumps(time_info, indent=2),
                meta={"generated": isoformat(now), "size": _compact_size(time_info)},
            )
        ]
    )


def _register_templates(registry: CapabilityRegistry) -> None:
    registry.add_template(
        ResourceTemplate(
            name="dynamic-content",
            title="Dynamic Content",
            uri_template=CONTENT_TEMPLATE_URI,
            description="Access dynamic content by type and ID",
            mime_type="application/json",
            annotations=Annotations(audience=["assistant"], priority=0.6),
            meta={
                "examples": [
                    f"{URI_SCHEME}://content/user/123",
                    f"{URI_SCHEME}://content/post/456",
                ]
            },
            completions={"type": CONTENT_TYPES},
        )
    )
    registry.add_template(
        ResourceTemplate(
            name="system-status",
            title="System Status",
            uri_template=STATUS_TEMPLATE_URI,
            description="Get status information for system components",
            mime_type="application/json",
            annotations=Annotations(audience=_BOTH, priority=0.7),
            meta={
                "examples": [
                    f"{URI_SCHEME}://status/memory",
                    f"{URI_SCHEME}://status/network",
                ]
            },
            completions={"component": STATUS_COMPONENTS},
        )
    )


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


def _register_prompts(registry: CapabilityRegistry, config: ServerConfig) -> None:
    def greeting(arguments: dict[str, str], now: datetime) -> GetPromptResult:
        user_name = arguments.get("name") or "there"
        language = arguments.get("language") or "English"
        greetings = {
            "English": f"Hello {user_name}! Welcome to the {config.title}.",
            "Spanish": f"¡Hola {user_name}! Bienvenido al servidor {config.title}.",
            "French": f"Bonjour {user_name}! Bienvenue sur le serveur {config.title}.",
            "German": f"Hallo {user_name}! Willkommen beim {config.title}.",
        }
        text = greetings.get(language, greetings["English"])
        return GetPromptResult(
            description=f"A friendly greeting in {language}",
            messages=[
                PromptMessage(
                    content=TextContent(
                        text=f"{text} How can I help you today?",
                        annotations=Annotations(audience=["user"], priority=1),
                    )
                )
            ],
        )

    def system_status(arguments: dict[str, str], now: datetime) -> GetPromptResult:
        stamp = isoformat(now)
        tools = ", ".join(t.name for t in registry.list_tools())
        resources = ", ".join(r.name for r in registry.list_resources())
        prompts = ", ".join(p.name for p in registry.list_prompts())
        text = "\n".join(
            [
                "System Status Report:",
                f"- Server: {config.title} v{config.version}",
                f"- Protocol: MCP {config.protocol_version}",
                f"- Runtime: {platform.python_implementation()} {platform.python_version()}",
                "- Status: Online and operational",
                f"- Current Time: {stamp}",
                "- Uptime: Active (stateless)",
                f"- Available Tools: {tools}",
                f"- Available Resources: {resources}",
                f"- Available Prompts: {prompts}",
            ]
        )
        return GetPromptResult(
            description="Comprehensive system status report",
            messages=[
                PromptMessage(
                    content=TextContent(
                        text=text,
                        annotations=Annotations(audience=_BOTH, priority=0.9, last_modified=stamp),
                    )
                )
            ],
        )

    registry.add_prompt(
        Prompt(
            name="greeting",
            title="Friendly Greeting",
            description="A friendly greeting prompt with optional personalization",
            arguments=[
                PromptArgument(
                    name="name",
                    title="Person's Name",
                    description="Name of the person to greet",
                ),
                PromptArgument(
                    name="language",
                    title="Language",
                    description="Language for the greeting",
                    completions=LANGUAGES,
                ),
            ],
            meta={"category": "social", "complexity": "simple"},
        ),
        greeting,
    )
    registry.add_prompt(
        Prompt(
            name="system_status",
            title="System Status Report",
            description="Comprehensive system status and information prompt",
            meta={"category": "system", "complexity": "detailed"},
        ),
        system_status,
    )
    registry.add_prompt(
        Prompt(
            name="troubleshooting",
            title="Troubleshooting Assistant",
            description="Interactive troubleshooting guide",
            arguments=[
                PromptArgument(
                    name="issue",
                    title="Issue Description",
                    description="Description of the problem",
                    required=True,
                ),
                PromptArgument(
                    name="severity",
                    title="Severity Level",
                    description="How critical is this issue (low, medium, high)",
                    completions=SEVERITIES,
                ),
            ],
            meta={"category": "support", "complexity": "interactive"},
        ),
        _troubleshooting,
    )


def _troubleshooting(arguments: dict[str, str], now: datetime) -> GetPromptResult:
    issue = arguments.get("issue") or "unspecified issue"
    severity = arguments.get("severity") or "medium"
    text = f"""Troubleshooting Assistant - {severity.upper()} Priority

Issue: {issue}

Let's work through this step by step:

1. First, let's gather some basic information
2. Check system status using the system_status prompt
3. Review recent changes or updates
4. Test basic functionality with available tools
5. Provide recommendations based on findings

Available diagnostic tools:
- get_time: Check system time and timezone
- echo: Test basic communication
- random_number: Test computational functions
- worker-info resource: Review system configuration

Would you like to start with any specific diagnostic step?"""
    return GetPromptResult(
        description="Interactive troubleshooting assistant",
        messages=[
            PromptMessage(
                content=TextContent(
                    text=text,
                    annotations=Annotations(audience=["user"], priority=0.9),
                )
            )
        ],
    )
