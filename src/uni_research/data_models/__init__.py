from uni_research.data_models.error_kind import ErrorKind
from uni_research.data_models.response import ResponseEnvelope
from uni_research.data_models.api_models import (
    EchoData,
    SlowOperationData,
    StatusData,
    SystemInfoData,
)

__all__ = [
    "ErrorKind",
    "ResponseEnvelope",
    "EchoData",
    "SlowOperationData",
    "StatusData",
    "SystemInfoData",
]
