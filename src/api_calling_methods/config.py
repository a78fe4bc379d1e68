"""
Configuration constants for the API Calling Methods demo.

This module centralizes all configurable parameters so the endpoint,
the text rendering and logging can be tuned in one place.
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class APIConfig:
    """API configuration settings."""
    base_url: str = "https://jsonplaceholder.typicode.com"
    posts_endpoint: str = "/posts"
    # None keeps httpx's default timeout
    timeout_seconds: Optional[float] = None

    @property
    def posts_url(self) -> str:
        """Get the full URL of the posts endpoint."""
        return f"{self.base_url}{self.posts_endpoint}"


@dataclass
class DisplayConfig:
    """Text rendering configuration."""
    title_line_limit: int = 1
    body_line_limit: int = 2
    line_width: int = 72

    # Labels offered by the mode selector
    modes: List[str] = field(default_factory=lambda: [
        "Async/Await",
        "Completion Handler",
        "Combine",
        "Alamofire",
    ])
    screen_title: str = "API Calling Methods"


@dataclass
class LogConfig:
    """Logging configuration."""
    log_directory: Path = field(default_factory=lambda: Path("logs"))
    log_filename: str = "api_calling_methods.log"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def log_file_path(self) -> Path:
        """Get full path to the log file."""
        return self.log_directory / self.log_filename


@dataclass
class Config:
    """Master configuration combining all sub-configurations."""
    api: APIConfig = field(default_factory=APIConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log: LogConfig = field(default_factory=LogConfig)


# Global configuration instance
config = Config()
