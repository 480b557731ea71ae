"""
Environment Management Module for icnskit

Uses python-dotenv for environment variable management.

Usage:
    from icnskit.env import env

    print(env.logs_dir)
    print(env.log_level)
"""

import os
from pathlib import Path
from dotenv import load_dotenv


# Global constants
ICNSKIT_VERSION = '0.1.0'

# Find icnskit home and load its .env file
icnskit_home = Path(os.getenv('ICNSKIT_HOME', str(Path.home() / '.icnskit'))).expanduser()
env_file = icnskit_home / '.env'

if env_file.exists():
    load_dotenv(env_file)


class EnvConfig:
    """Environment configuration object"""

    @property
    def home_dir(self) -> str:
        return str(icnskit_home)

    @property
    def logs_dir(self) -> str:
        logs_dir = os.getenv('ICNSKIT_PATHS_LOGS_DIR', 'logs')
        if not os.path.isabs(logs_dir):
            logs_dir = str(icnskit_home / logs_dir)
        return logs_dir

    @property
    def log_level(self) -> str:
        return os.getenv('ICNSKIT_LOGGING_CONSOLE_LEVEL', 'INFO')

    @property
    def log_file_enabled(self) -> bool:
        return os.getenv('ICNSKIT_LOGGING_FILE_ENABLED', 'false').lower() == 'true'

    @property
    def log_file_level(self) -> str:
        return os.getenv('ICNSKIT_LOGGING_FILE_LEVEL', 'DEBUG')

    @property
    def log_simple_format(self) -> bool:
        return os.getenv('ICNSKIT_LOGGING_CONSOLE_SIMPLE_FORMAT', 'true').lower() == 'true'

    @property
    def log_max_files(self) -> int:
        return int(os.getenv('ICNSKIT_LOGGING_MAX_FILES', '5'))

    @property
    def log_max_size(self) -> str:
        return os.getenv('ICNSKIT_LOGGING_MAX_SIZE', '10MB')

    @property
    def iconutil_path(self) -> str:
        """Executable used to package iconsets into icns files"""
        return os.getenv('ICNSKIT_ICONUTIL', 'iconutil')

    @property
    def version(self) -> str:
        return ICNSKIT_VERSION


# Global env object
env = EnvConfig()


def get_config_summary() -> dict:
    """Get configuration summary"""
    icnskit_vars = {k: v for k, v in os.environ.items() if k.startswith('ICNSKIT_')}

    return {
        'env_file': str(env_file),
        'env_file_exists': env_file.exists(),
        'variables': icnskit_vars,
        'paths': {
            'home_dir': env.home_dir,
            'logs_dir': env.logs_dir
        }
    }
