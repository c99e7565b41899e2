#!/usr/bin/env python3
"""Direct launcher for the Spending Tracker dashboard.

This script launches Streamlit on spending_tracker/dashboard.py from the
project root so the package imports resolve.
"""

import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()
dashboard_path = project_root / "spending_tracker" / "dashboard.py"

if __name__ == "__main__":
    sys.path.insert(0, str(project_root))
    raise SystemExit(subprocess.run(
        [sys.executable, "-m", "streamlit", "run", str(dashboard_path)],
        cwd=project_root,
    ).returncode)
