# UI.py
""""PySide6 user interface for CalcPad.

Structure
---------
- CalcPad UI: main window with editor, result panel and footer
- Settings UI: modal dialog for user preferences

Responsibilities (CalcPad)
--------------------------
- Build window, editor, result panel and footer
- Debounce edits and dispatch each pass to DocumentEngine in a worker thread
- Publish only the newest pass (generation counter in DocumentSession)
- Copy a result on click (Shift: 'expression = result')
- Export, save sessions, clear the document, toggle DEG/RAD


Responsibilities (Settings)
---------------------------

- Load Current Settings and Settings Descriptions via Config_Manager
- Validate user input (e.g. decimal places between 0 and 10)
- Save and apply theme changes immediately


Threading Note
--------------
Evaluation is executed off the UI thread in Worker(QObject), so typing never blocks.
Results (or errors) are emitted via a Qt signal and handled back in the UI.
"""""

from PySide6 import QtWidgets
from PySide6.QtCore import Qt, QObject, Signal, QTimer
import sys
import logging
from pathlib import Path
import threading
from pynput.keyboard import Controller
import pyperclip
from . import error as E  # Imports error.py as a module
from . import config_manager as config_manager  # Imports config_manager.py as a module
from . import DocumentEngine as DocumentEngine  # Imports DocumentEngine.py as a module
from . import exporter as exporter
from .session_store import SessionStore

logger = logging.getLogger(__name__)

# Resolve project root depending on run mode (Script or .exe)
if getattr(sys, 'frozen', False):
    # We are running in a PyInstaller bundle (.exe)
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    # We are running in a normal Python environment (.py)
    PROJECT_ROOT = Path(__file__).resolve().parent.parent


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used for "shift-click copies the whole line".

    """""

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


class Worker(QObject):
    """""

    Runs one evaluation pass in a separate thread and emits a Signal with the DocumentResult
    (or the error) back to the CalcPad UI, tagged with the pass generation.

    """""

    job_finished = Signal(object, int)

    def __init__(self, session, generation, text):
        super().__init__()
        self.session = session
        self.generation = generation
        self.data = text

    def run_Calc(self):

        try:
            # --- 1. Start Calculation ---
            # Line errors never get here, they are part of the DocumentResult
            result = self.session.run(self.generation, self.data)

            # --- 2. Send Success Signal ---
            self.job_finished.emit(result, self.generation)

        except E.MathError as e:
            # --- 3. Send Config Error Signal (invalid angle mode / precision) ---
            self.job_finished.emit(e, self.generation)

        except Exception as e:
            # --- 4. Send Critical Error Signal ---
            logger.exception("Evaluation pass %d crashed", self.generation)
            critical_error = E.MathError(
                message=f"Unexpected crash: {e}",
                code="9999",
                equation=None
            )
            self.job_finished.emit(critical_error, self.generation)


class ResultPanel(QtWidgets.QPlainTextEdit):
    """Read-only result column; a click reports the clicked line."""

    line_clicked = Signal(int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setLineWrapMode(QtWidgets.QPlainTextEdit.LineWrapMode.NoWrap)

    def mouseReleaseEvent(self, event):
        super().mouseReleaseEvent(event)
        cursor = self.cursorForPosition(event.position().toPoint())
        self.line_clicked.emit(cursor.blockNumber())


class SettingsDialog(QtWidgets.QDialog):
    """""

    This class is responsible for managing the settings window, saving the new settings and opening an error
    message if something went wrong.

    All of the Settings can be seperated into two categories:
    1. Checkboxes   (Managed with True or False)
    2. Input Fields (Managed as a String, converted to int where the default is an int)

    """""

    settings_saved = Signal()  # Signal to tell the main window to update

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}  # Dictionary, in which all of the Widgets (Setting options) are saved and stored.

        # --- 1. Window Setup ---
        self.setWindowTitle("CalcPad Settings")
        self.setMinimumSize(360, 260)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            # --- 3a. Checkbox Builder (for Boolean settings) ---
            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox  # Store widget for later saving

            # --- 3b. Input Field Builder (for Integer and text settings) ---
            else:
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                label = QtWidgets.QLabel(description + ":")
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder

                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)  # Make input field expand
                self.widgets[key_value] = input_field

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(lambda: self.save_settings(dict(self.setting_value_list)))
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self, setting_value_list):
        # --- 1. Collect values from the widgets ---
        for key_value, widget in self.widgets.items():

            # --- 2. Handle Checkboxes ---
            if isinstance(widget, QtWidgets.QCheckBox):
                setting_value_list[key_value] = widget.isChecked()

            # --- 3. Handle Input Fields ---
            elif isinstance(widget, QtWidgets.QLineEdit):
                new_value_str = widget.text().strip()

                # If user left it blank, keep the old value
                if new_value_str == "":
                    continue

                if isinstance(config_manager.DEFAULT_SETTINGS.get(key_value), int):
                    try:
                        setting_value_list[key_value] = int(new_value_str)
                    except ValueError:
                        self.show_invalid_input(key_value, f"'{new_value_str}' is not a whole number.")
                        return  # Stop saving!
                else:
                    setting_value_list[key_value] = new_value_str

        # --- 4. Validation + Write to File ---
        try:
            saved_settings = config_manager.save_setting(setting_value_list)
        except E.ConfigurationError as e:
            self.show_invalid_input(e.code, e.message)
            return

        if saved_settings != {}:
            self.setting_value_list = saved_settings
            self.settings_saved.emit()  # Tell the main window to update
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           f"Error 4501: {E.ERROR_MESSAGES['4501']}config.json")

    def show_invalid_input(self, key_value, message):
        logger.warning("Invalid settings input for %s: %s", key_value, message)
        QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                       f"Error in input for '{key_value}':\n\n{message}\n\nPlease correct your input.")

    def update_darkmode(self):
        # Applies the darkmode stylesheet if the setting is True
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")  # Revert to default stylesheet


class CalcPadWindow(QtWidgets.QWidget):
    shift_is_held = False

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State Variables ---
        self.session = DocumentEngine.DocumentSession(
            angle_mode=self.setting_value_list["angle_mode"],
            precision=self.setting_value_list["decimal_places"],
            show_errors=self.setting_value_list["show_errors"],
        )
        self.workers = {}  # generation -> Worker, kept alive until its signal arrives

        self.debounce_timer = QTimer(self)
        self.debounce_timer.setSingleShot(True)
        self.debounce_timer.timeout.connect(self.start_calculation)

        # --- 3. Window Setup ---
        self.setWindowTitle("CalcPad")
        self.resize(900, 560)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        # --- 4. Editor + Result Panel ---
        splitter = QtWidgets.QSplitter(Qt.Orientation.Horizontal)
        self.editor = QtWidgets.QPlainTextEdit()
        self.editor.setLineWrapMode(QtWidgets.QPlainTextEdit.LineWrapMode.NoWrap)
        self.editor.setPlaceholderText("x = 10\ny = 20\nx + y\n5 km to mi\n10 || 20")
        self.result_panel = ResultPanel()

        font = self.editor.font()
        font.setPointSize(14)
        self.editor.setFont(font)
        self.result_panel.setFont(font)

        splitter.addWidget(self.editor)
        splitter.addWidget(self.result_panel)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)
        main_v_layout.addWidget(splitter, 1)

        # Result panel scrolls with the editor so lines stay side by side
        self.editor.verticalScrollBar().valueChanged.connect(self.result_panel.verticalScrollBar().setValue)
        self.editor.textChanged.connect(self.schedule_calculation)
        self.result_panel.line_clicked.connect(self.copy_result)

        # --- 5. Footer ---
        footer = QtWidgets.QHBoxLayout()
        main_v_layout.addLayout(footer)

        self.button_objects = {}
        for text, handler in (("Export", self.export_document),
                              ("Settings", self.open_settings),
                              ("Save session", self.save_session),
                              ("Clear", self.clear_document)):
            button = QtWidgets.QPushButton(text)
            button.clicked.connect(handler)
            footer.addWidget(button)
            self.button_objects[text] = button

        footer.addStretch(1)
        self.line_count_label = QtWidgets.QLabel()
        self.variable_count_label = QtWidgets.QLabel()
        footer.addWidget(self.line_count_label)
        footer.addWidget(self.variable_count_label)

        self.angle_button = QtWidgets.QPushButton(self.session.angle_mode)
        self.angle_button.clicked.connect(self.toggle_angle_mode)
        footer.addWidget(self.angle_button)
        self.button_objects["angle"] = self.angle_button

        self.update_footer()
        self.update_darkmode()

    # --- Window/Key Event Handlers ---
    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = True
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = False
        super().keyReleaseEvent(event)

    # --- Calculation ---
    def schedule_calculation(self):
        # Restart the debounce window on every keystroke
        self.debounce_timer.start(self.setting_value_list["debounce_ms"])

    def start_calculation(self):
        text = self.editor.toPlainText()
        generation = self.session.schedule(text)

        # --- Start Thread ---
        worker_instance = Worker(self.session, generation, text)
        worker_instance.job_finished.connect(self.Calc_result)
        self.workers[generation] = worker_instance
        my_thread = threading.Thread(target=worker_instance.run_Calc, daemon=True)
        my_thread.start()

    def Calc_result(self, result, generation):
        self.workers.pop(generation, None)

        # A newer pass is scheduled: drop this one, value or error
        if not self.session.is_current(generation):
            return

        if isinstance(result, E.MathError):
            self.show_error(result, "Calculation error")
            return

        if not self.session.publish(generation, result):
            return

        self.result_panel.setPlainText("\n".join(result.display))
        self.result_panel.verticalScrollBar().setValue(self.editor.verticalScrollBar().value())
        self.update_footer()

    def update_footer(self):
        line_count = self.editor.blockCount()
        self.line_count_label.setText(f"Lines: {line_count}")
        self.variable_count_label.setText(f"Variables: {self.session.variable_count}")
        self.angle_button.setText(self.session.angle_mode)

    # --- Clipboard ---
    def copy_result(self, index):
        result = self.session.result
        if result is None or index >= len(result.display):
            return
        display = result.display[index]
        if not display or result.results[index].is_error:
            return

        if self.shift_is_held or is_shift_pressed():
            clipboard_text = f"{result.lines[index].source_text} = {display}"
        else:
            clipboard_text = display

        pyperclip.copy(clipboard_text)
        logger.debug("Copied line %d: %s", index, clipboard_text)

    # --- Footer Actions ---
    def toggle_angle_mode(self):
        self.session.toggle_angle_mode()
        self.setting_value_list["angle_mode"] = self.session.angle_mode
        config_manager.save_setting(self.setting_value_list)
        self.update_footer()
        self.start_calculation()

    def clear_document(self):
        answer = QtWidgets.QMessageBox.question(self, "Clear",
                                                "Are you sure you want to clear all calculations?")
        if answer != QtWidgets.QMessageBox.StandardButton.Yes:
            return
        self.session.clear()
        self.editor.blockSignals(True)
        self.editor.clear()
        self.editor.blockSignals(False)
        self.result_panel.clear()
        self.update_footer()

    def export_document(self):
        default_path = str(Path.home() / exporter.DEFAULT_EXPORT_NAME)
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Export", default_path, "Text files (*.txt)")
        if not path:
            return

        display = self.session.result.display if self.session.result is not None else []
        try:
            exporter.write_export(path, self.editor.toPlainText(), display,
                                  self.setting_value_list["export_column_width"])
        except OSError as e:
            self.show_error(E.MathError(f"{path}: {e}", code="4003"), "Export error")

    def save_session(self):
        name, accepted = QtWidgets.QInputDialog.getText(self, "Save session", "Name:")
        if not accepted or not name.strip():
            return

        store = SessionStore(PROJECT_ROOT / self.setting_value_list["sessions_file"])
        try:
            record = store.create(name.strip(), self.editor.toPlainText(), self.session.environment.to_dict())
        except E.StorageError as e:
            self.show_error(e, "Storage error")
            return
        QtWidgets.QMessageBox.information(self, "Save session", f"Saved as session {record['id']}.")

    def open_settings(self):
        # --- Open Settings Dialog ---
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # "exec" makes the dialog modal (blocks main window)

        # --- Reload settings after dialog closes ---
        self.setting_value_list = config_manager.load_setting_value("all")
        try:
            self.session.set_angle_mode(self.setting_value_list["angle_mode"])
            self.session.set_precision(self.setting_value_list["decimal_places"])
        except E.ConfigurationError as e:
            self.show_error(e, "Configuration error")
        self.session.show_errors = self.setting_value_list["show_errors"]
        self.update_darkmode()
        self.update_footer()
        self.start_calculation()

    # --- Styling / Dialogs ---
    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            for button in self.button_objects.values():
                button.setStyleSheet("background-color: #2e2e2e; color: white; font-weight: bold;")
            self.setStyleSheet("background-color: #121212; color: white;")
            self.editor.setStyleSheet("background-color: #1e1e1e; color: white;")
            self.result_panel.setStyleSheet("background-color: #1e1e1e; color: #7fd47f;")

        else:
            for button in self.button_objects.values():
                button.setStyleSheet("")
            self.setStyleSheet("")
            self.editor.setStyleSheet("")
            self.result_panel.setStyleSheet("color: #1f6f1f;")

    def get_message_box_stylesheet(self):
        # Provides a matching stylesheet for error boxes in dark mode
        if self.setting_value_list["darkmode"] == True:
            return """
                QMessageBox {
                    background-color: #121212;
                    color: white;
                }
                QLabel {
                    color: white;
                }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
            """
        else:
            return ""

    def show_error(self, error_obj, title):
        logger.error("Error %s: %s", error_obj.code, error_obj.message)
        error_box = QtWidgets.QMessageBox(self)
        error_box.setIcon(QtWidgets.QMessageBox.Critical)
        error_box.setWindowTitle(title)
        error_box.setText(f"Error {error_obj.code}: {E.ERROR_MESSAGES.get(error_obj.code, 'Unknown error')}")
        error_box.setInformativeText(f"Details: {error_obj.message}")
        error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
        error_box.setStyleSheet(self.get_message_box_stylesheet())
        error_box.exec()


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication()
    window = CalcPadWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
