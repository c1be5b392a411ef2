"""Runtime package.

Keep this module dependency-light: importing `channel_voice.runtime.*` from
host integrations and unit tests should not start any session.
"""

__all__: list[str] = []
