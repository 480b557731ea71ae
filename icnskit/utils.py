"""
Common Utility Functions

Provides utility functions for icnskit including:
- Directory creation
- External command execution
"""

import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary

    Args:
        path: Directory path

    Returns:
        Path object for the directory
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def run_command(command: List[str], cwd: Optional[Union[str, Path]] = None,
                env: Optional[Dict[str, str]] = None,
                timeout: Optional[int] = None) -> Tuple[bool, str, str]:
    """
    Run a system command and return result

    Args:
        command: Command and arguments as list
        cwd: Working directory
        env: Environment variables
        timeout: Timeout in seconds, None waits for completion

    Returns:
        Tuple of (success, stdout, stderr)
    """
    try:
        result = subprocess.run(
            command,
            cwd=str(cwd) if cwd is not None else None,
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False
        )

        return (
            result.returncode == 0,
            result.stdout,
            result.stderr
        )

    except subprocess.TimeoutExpired:
        return (False, "", f"Command timed out after {timeout} seconds")
    except FileNotFoundError:
        return (False, "", f"Command not found: {command[0]}")
    except PermissionError:
        return (False, "", f"Permission denied: {command[0]}")
