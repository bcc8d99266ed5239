"""
Trans-Relay 核心契约：异常、数据类型与持久化接口。
"""
from .exceptions import (
    ConfigurationError, DataConsistencyError, DatabaseError,
    MissingConfigError, TransRelayError, UnsupportedLocaleError, VendorError,
)
from .types import (
    ACCEPTED, ERROR, SUCCESS,
    AccessToken, ContextOutcome, JobRecord, Page, RunReport,
    TranslationRecord, TranslationStatus, UploadOutcome,
    VendorFailure, VendorResult, VendorSuccess,
)
from .uow import (
    IJobRepository, ITranslationJobRepository, ITranslationRepository, IUnitOfWork,
)

__all__ = [
    # from exceptions.py
    "TransRelayError", "ConfigurationError", "MissingConfigError",
    "UnsupportedLocaleError", "VendorError", "DataConsistencyError", "DatabaseError",
    # from types.py
    "ACCEPTED", "SUCCESS", "ERROR",
    "TranslationStatus", "Page", "UploadOutcome", "ContextOutcome", "AccessToken",
    "VendorSuccess", "VendorFailure", "VendorResult",
    "TranslationRecord", "JobRecord", "RunReport",
    # from uow.py
    "IUnitOfWork", "ITranslationRepository", "IJobRepository",
    "ITranslationJobRepository",
]
