"""
Tools Gemini can call mid-conversation.

Usage examples:
```python
from voice_relay.tools import Tool, build_registry

registry = build_registry(settings)
result = await registry.execute("get_transcript", {}, context)

# An extension module listed in TOOL_MODULES:
def register(registry):
    registry.register(Tool(name="check_weather", description="...", handler=handler))
```
"""

from voice_relay.tools.loader import build_registry, load_extension_tools
from voice_relay.tools.registry import Tool, ToolContext, ToolRegistry
