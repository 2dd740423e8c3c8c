"""Domain-specific exceptions"""


class ReportGenerationError(Exception):
    """Base exception for failures that abort report generation"""

    pass


class UnsupportedFileTypeError(ReportGenerationError):
    """Uploaded file is not a spreadsheet format we can read"""

    pass


class RowSourceError(ReportGenerationError):
    """Spreadsheet could not be opened or its rows could not be read"""

    pass


class RenderingError(ReportGenerationError):
    """Report could not be rendered to a printable document"""

    pass
