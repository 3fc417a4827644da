from prompt_agnostic.tui.renderers import ConverterConsoleUI

__all__ = ["ConverterConsoleUI"]
