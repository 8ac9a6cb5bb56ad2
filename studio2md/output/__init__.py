from studio2md.output.writer import MarkdownWriter

__all__ = ["MarkdownWriter"]
