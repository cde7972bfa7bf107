"""
Domain exceptions.
"""


class CodeTableLoadError(RuntimeError):
    """
    A language code table could not be fetched or parsed.

    The tables are reference data expected to be reachable at deploy time,
    so a failed build is fatal for the table concerned. Lookups never fall
    back to an empty table.
    """

    def __init__(self, table: str, source: str, reason: str) -> None:
        self.table = table
        self.source = source
        super().__init__(f"Cannot build code table '{table}' from {source}: {reason}")
