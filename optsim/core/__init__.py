from .config_models import ALL_EXPIRIES, EngineSettings, EvaluationConfig, ViewMode

__all__ = ["ALL_EXPIRIES", "EngineSettings", "EvaluationConfig", "ViewMode"]
