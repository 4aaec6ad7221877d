# UI.py
""""PySide6 user interface for the MathSolver calculator.

Structure
---------
- Calculator UI: expression entry, result display and step list
- Settings UI: modal dialog for arithmetic mode and display preferences

Responsibilities (Calculator)
-----------------------------
- Dispatch the expression to MathEngine in a worker thread
- Assign variables for input of the form "name = expression"
- Render the result and the step trace, shortened to the configured width
- Show MathEngine errors as dialogs
- Copy the result to the clipboard

Threading Note
--------------
Evaluation runs off the UI thread in Worker(QObject). Results (or errors) are
emitted via a Qt signal and handled back in the UI. Only one calculation runs
at a time.
"""

import logging
import sys
import threading

import pyperclip
from PySide6 import QtWidgets
from PySide6.QtCore import QObject, Qt, Signal

from . import config_manager as config_manager
from . import error as E
from . import MathEngine as MathEngine
from . import presentation
from .Arithmetic import ArithmeticMode

logger = logging.getLogger(__name__)

DARK_STYLESHEET = """
    QWidget {background-color: #121212; color: white;}
    QLineEdit, QListWidget, QComboBox, QSpinBox {background-color: #444444; color: white; border: 1px solid #666666;}
    QPushButton {background-color: #666666; color: white;}"""


class Worker(QObject):
    """""

    Runs one calculation in a separate thread and emits job_finished with
    (result or error, original input, assigned variable name or "").

    """""

    job_finished = Signal(object, str, str)

    def __init__(self, problem, trace):
        super().__init__()
        self.data = problem
        self.trace = trace

    def run_Calc(self):
        name, expression = presentation.split_assignment(self.data)
        try:
            result = MathEngine.evaluate(expression, trace=self.trace)
            if name is not None:
                MathEngine.set_variable(name, result.value)
            self.job_finished.emit(result, self.data, name or "")

        except E.MathError as e:
            self.job_finished.emit(e, self.data, "")

        except Exception as e:
            logger.exception("Unexpected crash while evaluating %r", self.data)
            critical_error = E.MathError(
                message=E.ERROR_MESSAGES["9999"] + str(e),
                code="9999",
                equation=self.data
            )
            self.job_finished.emit(critical_error, self.data, "")


class SettingsDialog(QtWidgets.QDialog):
    """""

    Edits the arithmetic settings and display preferences and saves them
    through config_manager when OK is pressed.

    """""

    settings_saved = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(320, 220)

        self.setting_value_list = config_manager.load_setting_value("all")
        descriptions = config_manager.load_setting_description("all")

        main_layout = QtWidgets.QFormLayout(self)

        self.mode_box = QtWidgets.QComboBox()
        for mode in ArithmeticMode:
            self.mode_box.addItem(mode.value)
        self.mode_box.setCurrentText(str(self.setting_value_list["arithmetic_mode"]).lower())
        main_layout.addRow(descriptions.get("arithmetic_mode", "Mode"), self.mode_box)

        self.precision_box = QtWidgets.QSpinBox()
        self.precision_box.setRange(0, 15)
        self.precision_box.setValue(int(self.setting_value_list["precision"]))
        main_layout.addRow(descriptions.get("precision", "Precision"), self.precision_box)

        self.checkboxes = {}
        for key_value in ("use_significant_digits", "show_steps", "darkmode"):
            checkbox = QtWidgets.QCheckBox(descriptions.get(key_value, key_value))
            checkbox.setChecked(bool(self.setting_value_list[key_value]))
            main_layout.addRow(checkbox)
            self.checkboxes[key_value] = checkbox

        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)
        main_layout.addRow(button_box)

        if self.setting_value_list["darkmode"]:
            self.setStyleSheet(DARK_STYLESHEET)

    def save_settings(self):
        new_settings = dict(self.setting_value_list)
        new_settings["arithmetic_mode"] = self.mode_box.currentText()
        new_settings["precision"] = self.precision_box.value()
        for key_value, checkbox in self.checkboxes.items():
            new_settings[key_value] = checkbox.isChecked()

        try:
            MathEngine.apply_settings(new_settings)
        except E.MathError as e:
            QtWidgets.QMessageBox.critical(self, "Invalid Input:", f"{e}\n\nPlease correct your input.")
            return

        if config_manager.save_setting(new_settings) == {}:
            QtWidgets.QMessageBox.critical(self, "Error", E.ERROR_MESSAGES["4501"] + str(config_manager.config_json))
            return

        self.settings_saved.emit()
        self.accept()


class CalculatorWindow(QtWidgets.QWidget):

    def __init__(self):
        super().__init__()
        self.setting_value_list = config_manager.load_setting_value("all")
        self.thread_active = False
        self.last_result = None

        self.setWindowTitle("MathSolver")
        self.resize(420, 520)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        # --- Display ---
        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        font = self.display.font()
        font.setPointSize(28)
        self.display.setFont(font)
        main_v_layout.addWidget(self.display)

        # --- Input ---
        self.entry = QtWidgets.QLineEdit()
        self.entry.setMaxLength(MathEngine.MAX_INPUT_LENGTH)
        self.entry.setPlaceholderText("Expression, or name = expression")
        self.entry.returnPressed.connect(self.start_calculation)
        main_v_layout.addWidget(self.entry)

        button_row = QtWidgets.QHBoxLayout()
        for text, handler in (("=", self.start_calculation), ("Copy", self.copy_result),
                              ("C", self.clear), ("Settings", self.open_settings)):
            button = QtWidgets.QPushButton(text)
            button.clicked.connect(handler)
            button_row.addWidget(button)
        main_v_layout.addLayout(button_row)

        # --- Step trace ---
        self.steps = QtWidgets.QListWidget()
        main_v_layout.addWidget(self.steps, 1)

        self.apply_settings()

    def apply_settings(self):
        self.setting_value_list = config_manager.load_setting_value("all")
        try:
            MathEngine.apply_settings(self.setting_value_list)
        except E.MathError as e:
            self.show_error(e)
        self.steps.setVisible(bool(self.setting_value_list["show_steps"]))
        self.setStyleSheet(DARK_STYLESHEET if self.setting_value_list["darkmode"] else "")

    def start_calculation(self):
        problem = self.entry.text().strip()
        if not problem:
            return
        if self.thread_active:
            QtWidgets.QMessageBox.information(self, "Busy", E.ERROR_MESSAGES["4002"])
            return

        self.thread_active = True
        self.worker = Worker(problem, bool(self.setting_value_list["show_steps"]))
        self.worker.job_finished.connect(self.calculation_finished)
        threading.Thread(target=self.worker.run_Calc, daemon=True).start()

    def calculation_finished(self, result, problem, assigned_name):
        self.thread_active = False

        if isinstance(result, E.MathError):
            self.show_error(result)
            return

        self.last_result = result
        if assigned_name:
            self.display.setText(f"{assigned_name} = {result.formatted_result}")
        else:
            self.display.setText(result.formatted_result)

        self.steps.clear()
        width = self.setting_value_list.get("display_width")
        for line in presentation.render_steps(result, width):
            self.steps.addItem(line)

    def show_error(self, error):
        title, message = E.describe(error)
        if error.equation:
            message = f"{message}\n\nInput: {error.equation}"
        QtWidgets.QMessageBox.critical(self, title, message)

    def copy_result(self):
        if self.last_result is not None:
            pyperclip.copy(self.last_result.formatted_result)

    def clear(self):
        self.entry.clear()
        self.display.setText("0")
        self.steps.clear()

    def open_settings(self):
        dialog = SettingsDialog(self)
        dialog.settings_saved.connect(self.apply_settings)
        dialog.exec()


def main():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    return app.exec()
