"""
gobin-info: find the source repositories of installed Go binaries
"""

__version__ = "0.1.0"
