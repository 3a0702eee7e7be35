"""Job models, condition tracking, defaulting, listers and test builders for training job controllers."""

__version__ = "0.1.0"

__all__ = [
    "defaults",
    "fixtures",
    "k8sutil",
    "lister",
    "logger",
    "models",
    "signals",
    "status",
    "train",
    "util",
]