"""
SourceChat - chat with a local project tree

Quick Start:
    from sourcechat import SourceChat
    from providers import SourceChatConfig

    app = SourceChat(SourceChatConfig.from_env())
    result = app.ingest_directory("./docs", "*.md")
    print(app.query("What is this project about?").value)
"""

__version__ = "1.0.0"

from .app import SourceChat

__all__ = ["__version__", "SourceChat"]
