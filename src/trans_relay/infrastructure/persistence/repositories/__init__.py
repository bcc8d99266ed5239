from ._job_repo import SqlAlchemyJobRepository
from ._link_repo import SqlAlchemyTranslationJobRepository
from ._translation_repo import SqlAlchemyTranslationRepository

__all__ = [
    "SqlAlchemyTranslationRepository",
    "SqlAlchemyJobRepository",
    "SqlAlchemyTranslationJobRepository",
]
