"""
Entry point for running Novel Translator as a module.

Usage:
    python -m novel_translator --help
    python -m novel_translator translate --text "张三与李四同行" --term 张三="Zhang San"
    python -m novel_translator read "Coiling Dragon" 1
"""
from .cli import app


if __name__ == "__main__":
    app()
