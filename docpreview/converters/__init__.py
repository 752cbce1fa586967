from .csv_converter import CsvConverter
from .spreadsheet_converter import SpreadsheetConverter
from .word_converter import WordConverter
from .markdown_converter import MarkdownConverter

__all__ = ["CsvConverter", "SpreadsheetConverter", "WordConverter", "MarkdownConverter"]
