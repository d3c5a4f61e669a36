"""
===============================================================================
main.py — Primary entry point for the recipe import tool
===============================================================================

-------------------------------------------------------------------------------
Purpose:
    Single executable entry point.

    When executed, the program can:
        (1) Launch the Streamlit preview (no arguments), or
        (2) Import one recipe URL from the terminal:
             • Fetches the page via `scraper_recipe.parse_recipe_from_url`
             • Estimates ingredient macros from the static nutrition table
             • Saves output to `<RECIPE_RESULTS_DIR>/recipe_<slug>.json`

    Usage:
        python main.py
        python main.py https://www.example.com/recipes/pancakes

-------------------------------------------------------------------------------
Notes:
    • No absolute paths; all directories are relative to the project root.
    • No packages are auto-installed; install dependencies manually via:
          pip install -r requirements.txt

===============================================================================
"""
from __future__ import annotations
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
APP_PATH = ROOT / "streamlit_app.py"


def _launch_streamlit():
    """
    Launches 'streamlit run streamlit_app.py' programmatically without spawning a shell.
    """
    try:
        import runpy
        import streamlit  # noqa: F401  # just to check availability

        # Build argv exactly as if the user typed: streamlit run streamlit_app.py
        sys.argv = [
            "streamlit", "run", str(APP_PATH),
            "--server.headless=true"
        ]
        runpy.run_module("streamlit.web.cli", run_name="__main__")

    except ImportError:
        print(
            "[ERROR] Streamlit is not installed.\n"
            "Please install dependencies manually:\n"
            "  pip install -r requirements.txt\n\n"
            "Then launch either:\n"
            f"  streamlit run {APP_PATH}\n"
            "or just re-run:\n"
            "  python main.py\n"
        )
        raise SystemExit(1)


if __name__ == "__main__":
    if len(sys.argv) > 1:
        from runner import main as run_cli
        raise SystemExit(run_cli(sys.argv[1:]))
    if not APP_PATH.exists():
        print(f"[ERROR] Cannot find app file: {APP_PATH}")
        raise SystemExit(1)
    _launch_streamlit()
