"""
Configuration module for the voice relay.

Key components:
- constants: Application-wide constants (logger name, audio rates, frame size,
  client message types, default model and instruction text).
- logging_config: Console and rotating file logging for the application logger.
- settings: Environment-driven runtime settings.

Usage examples:
```python
from voice_relay.config.constants import LOGGER_NAME, FRAME_BYTES
from voice_relay.config.logging_config import configure_logging
from voice_relay.config.settings import Settings

logger = configure_logging()
settings = Settings()
```
"""
