"""Date puzzle solver configuration."""

from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class SolverConfig(BaseSettings):
    """Configuration settings for the date puzzle solver."""

    max_workers: int | None = None
    """Maximum number of worker processes to use. If None (default), uses os.cpu_count() - 1."""

    anchor_first_open_cell: bool = True
    """Only try the offset that covers the first open cell of the current row. Default: True.

    The search stays complete either way; disabling this tries every column offset on the
    current row, which explores the same tilings in many more orders.
    """

    report_interval: int = 1_000_000
    """Interval (in number of placement attempts) at which to report progress. Default: 1000000."""

    log_dir: str = "logs"
    """Directory for run log files. Default: "logs"."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="forbid",
    )


config = SolverConfig()
