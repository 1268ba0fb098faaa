from .matplotlib_presenter import MatplotlibPresenter, PresenterState

__all__ = ["MatplotlibPresenter", "PresenterState"]
