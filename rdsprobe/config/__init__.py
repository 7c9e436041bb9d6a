from .model import AppConfig, RunConfig, ProbeConfig, LoggingConfig
