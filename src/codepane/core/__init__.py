"""Core data types for codepane.

Result tables, anomaly records and the ``Success``/``Failure`` result type
that the pipeline stages exchange.
"""

from .anomalies import Anomaly, AnomalyKind
from .result_primitives import Failure, Result, Success
from .table import Column, FieldType, ResultTable

__all__ = [
    "Anomaly",
    "AnomalyKind",
    "Column",
    "Failure",
    "FieldType",
    "Result",
    "ResultTable",
    "Success",
]
