"""hexobot - Hexo blog and web retrieval tools for AI agents."""

__version__ = "0.1.0"
