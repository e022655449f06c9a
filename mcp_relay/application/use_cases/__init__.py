from .process_query import ProcessQueryUseCase

__all__ = [
    "ProcessQueryUseCase",
]
