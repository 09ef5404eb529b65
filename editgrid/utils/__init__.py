"""通用工具包."""
