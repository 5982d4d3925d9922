"""Editor usecases built on injected ports."""

from .foreground import ForegroundConfigPort, ForegroundElementUsecase, SelectionPort

__all__ = [
    'ForegroundConfigPort',
    'SelectionPort',
    'ForegroundElementUsecase',
]
