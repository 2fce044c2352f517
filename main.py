# Main.py
""""" Entry point for CalcPad.

   Responsibilities:
   - Detect run mode (script vs PyInstaller.exe)
   - Verify required files exist in development mode
   - Set up logging and start the Qt GUI

"""""
import sys
import logging
from pathlib import Path
from calcpad import config_manager as config_manager, UI as UI
from calcpad.logging_config import setup_logging


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent


REQUIRED_MODULES = [
    "UI.py",
    "DocumentEngine.py",
    "MathEngine.py",
    "ScientificEngine.py",
    "Normalizer.py",
    "Values.py",
    "UnitEngine.py",
    "Environment.py",
    "Formatter.py",
    "error.py",
    "config_manager.py",
    "session_store.py",
    "exporter.py",
    "logging_config.py",
]


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
      In production (.exe) the files are embedded by the bundler, so this check is skipped.
    """

    package_dir = PROJECT_ROOT / "calcpad"

    REQUIRED = [package_dir / name for name in REQUIRED_MODULES]
    REQUIRED.append(PROJECT_ROOT / "config.json")
    REQUIRED.append(PROJECT_ROOT / "ui_strings.json")

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error 1000: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def main():

    """
    Load configuration and start the GUI.
    - Keep this thin: no business logic here.
    """

    logger = setup_logging(logging.INFO)
    all_settings = config_manager.load_setting_value("all")
    logger.info("Config loaded: %s", all_settings)

    # Delegate control to the UI layer; the UI owns the event loop.
    UI.main()


if __name__ == "__main__":
    # Two explicit modes aid debugging & packaging clarity.
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe:
        print("Developer Mode: Checking file paths...")
        check_files_exist()
    else:
        print("Production mode (.exe) is starting...")
    main()
