from .assembler import ProcessingSummary, ResultAssembler, TripReport, write_report

__all__ = ["ProcessingSummary", "ResultAssembler", "TripReport", "write_report"]
