from extbind import ServiceCollection, widgets
from extbind.widgets import DefaultWidgetService, Widget, WidgetService


def main() -> None:
    services = ServiceCollection()
    services.add_singleton(WidgetService, DefaultWidgetService)
    provider = services.build_provider()

    widgets.initialize(provider)

    widget = Widget(name="test", value=42)
    enhanced = widgets.enhance_with_di(widget)
    print(f"Original: {widget}\nEnhanced: {enhanced}")  # noqa: T201


if __name__ == "__main__":
    main()
