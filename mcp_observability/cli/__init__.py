"""
MCP Observability - CLI Interface
コマンドラインインターフェース
"""

from .main import main

__all__ = ["main"]
