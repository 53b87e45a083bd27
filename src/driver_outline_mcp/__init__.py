"""Symbol outlines of C/C++ source trees, served over MCP."""

__version__ = "0.1.0"
