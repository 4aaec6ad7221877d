# Main.py
""""" Entry point for the MathSolver calculator.

   Responsibilities:
   - Configure logging
   - Load configuration and apply the arithmetic settings
   - Start the Qt GUI, or a line-based console with --console

"""""
import sys

from mathsolver import config_manager as config_manager
from mathsolver import error as E
from mathsolver import MathEngine as MathEngine
from mathsolver import presentation
from mathsolver.logging_config import setup_logging


def run_console(settings):
    """
    Read expressions line by line until 'exit' or end of input.
    'name = expression' assigns a variable.
    """
    width = settings.get("display_width")
    show_steps = bool(settings.get("show_steps"))

    print("MathSolver. Enter an expression, 'name = expression' or 'exit'.")
    for line in sys.stdin:
        problem = line.strip()
        if not problem:
            continue
        if problem.lower() == "exit":
            break

        name, expression = presentation.split_assignment(problem)
        try:
            result = MathEngine.evaluate(expression, trace=show_steps)
            if name is not None:
                MathEngine.set_variable(name, result.value)
        except E.MathError as e:
            title, message = E.describe(e)
            print(f"{title}: {message}")
            continue

        for step_line in presentation.render_steps(result, width):
            print(f"  {step_line}")
        prefix = f"{name} = " if name is not None else "= "
        print(prefix + result.formatted_result)


def main():

    """
    Load configuration and start the front end.
    - Keep this thin: no business logic here.
    """

    all_settings = config_manager.load_setting_value("all")
    setup_logging(all_settings.get("log_level", "INFO"))
    MathEngine.apply_settings(all_settings)

    if "--console" in sys.argv[1:]:
        run_console(all_settings)
        return 0

    # Imported here so the console works without a display server
    from mathsolver import UI as UI
    return UI.main()


if __name__ == "__main__":
    sys.exit(main())
