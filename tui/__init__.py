from tui.config import ViewerConfig, load_config
from tui.terminal import KeyEvent, Terminal, TerminalError, decode_key

__all__ = [
    "KeyEvent",
    "Terminal",
    "TerminalError",
    "ViewerConfig",
    "decode_key",
    "load_config",
]
