import os
import subprocess
import sys
import textwrap
from pathlib import Path


SRC = Path(__file__).resolve().parent.parent / "src"


def run_python(*args):
    pythonpath = os.pathsep.join(p for p in (str(SRC), os.environ.get("PYTHONPATH", "")) if p)
    return subprocess.run(
        [sys.executable, *args],
        env={**os.environ, "PYTHONPATH": pythonpath},
        capture_output=True,
        text=True,
        timeout=60,
        check=False,
    )


def test_demo_prints_original_and_enhanced_widget():
    result = run_python("-m", "extbind")

    assert result.returncode == 0, result.stderr
    assert result.stdout == "Original: Widget(Name=test, Value=42)\nEnhanced: Widget(Name=TEST, Value=84)\n"


def test_module_binding_before_and_after_initialize():
    code = textwrap.dedent(
        """
        from extbind import BindingError, ServiceCollection, UninitializedBindingError, widgets
        from extbind.widgets import DefaultWidgetService, Widget, WidgetService

        try:
            widgets.enhance_with_di(Widget(name="unit", value=10))
        except UninitializedBindingError:
            print("uninitialized")

        try:
            widgets.initialize(ServiceCollection().build_provider())
        except BindingError:
            print("not registered")

        try:
            widgets.enhance_with_di(Widget(name="unit", value=10))
        except UninitializedBindingError:
            print("still uninitialized")

        widgets.initialize(ServiceCollection().add_singleton(WidgetService, DefaultWidgetService).build_provider())
        print(widgets.enhance_with_di(Widget(name="unit", value=10)))
        """
    )

    result = run_python("-c", code)

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == [
        "uninitialized",
        "not registered",
        "still uninitialized",
        "Widget(Name=UNIT, Value=20)",
    ]
