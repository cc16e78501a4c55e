from .main import run_stdio

__all__ = ["run_stdio"]
