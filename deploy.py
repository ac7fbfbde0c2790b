"""
Contract Deployment Wrapper
Runs the scripts.deploy_auction module from the project root
"""

import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent


def run() -> int:
    """Run the deployment script and return its exit code"""
    result = subprocess.run(
        [sys.executable, "-m", "scripts.deploy_auction"],
        cwd=PROJECT_ROOT
    )
    return result.returncode


if __name__ == "__main__":
    sys.exit(run())
