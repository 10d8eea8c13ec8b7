"""Live value access: read and write field values straight from the document."""

from typing import Any, Optional

from bs4 import Tag


def _input_type(element: Tag) -> str:
    return (element.get("type") or "text").lower()


def option_value(option: Tag) -> str:
    """An option's value attribute, or its text when it has none."""
    if option.has_attr("value"):
        return option["value"]
    return option.get_text(strip=True)


def read_value(form: Tag, element: Tag) -> str:
    """Current raw value of a single-valued field."""
    if element.name == "textarea":
        return element.get_text()

    if element.name == "select":
        options = element.find_all("option")
        selected = [option for option in options if option.has_attr("selected")]
        chosen = selected[0] if selected else (options[0] if options else None)
        return option_value(chosen) if chosen is not None else ""

    input_type = _input_type(element)
    if input_type == "radio":
        name = element.get("name")
        group = form.find_all("input", attrs={"name": name}) if name else [element]
        for radio in group:
            if _input_type(radio) == "radio" and radio.has_attr("checked"):
                return radio.get("value", "on")
        return ""
    if input_type == "checkbox":
        return element.get("value", "on") if element.has_attr("checked") else ""

    return element.get("value", "")


def read_selection(form: Tag, name: str) -> list[str]:
    """Selected values of the multi-select group called `name`, in document order.

    Covers checkbox groups and <select multiple>.
    """
    selected: list[str] = []
    for element in form.find_all(["input", "select"], attrs={"name": name}):
        if element.name == "select":
            selected.extend(
                option_value(option)
                for option in element.find_all("option")
                if option.has_attr("selected")
            )
        elif _input_type(element) == "checkbox" and element.has_attr("checked"):
            selected.append(element.get("value", "on"))
    return selected


def _format(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _set_flag(element: Tag, attribute: str, on: bool) -> None:
    if on:
        element[attribute] = ""
    elif element.has_attr(attribute):
        del element[attribute]


def write_value(form: Tag, element: Tag, value: Any) -> None:
    """Mirror a single value into the document."""
    text = _format(value)

    if element.name == "textarea":
        element.string = text
        return

    if element.name == "select":
        for option in element.find_all("option"):
            _set_flag(option, "selected", option_value(option) == text)
        return

    input_type = _input_type(element)
    if input_type == "radio":
        name = element.get("name")
        group = form.find_all("input", attrs={"name": name}) if name else [element]
        for radio in group:
            if _input_type(radio) == "radio":
                _set_flag(radio, "checked", radio.get("value", "on") == text)
        return
    if input_type == "checkbox":
        _set_flag(element, "checked", text == element.get("value", "on"))
        return

    element["value"] = text


def write_selection(form: Tag, name: str, values: Optional[list[str]]) -> None:
    """Check exactly the options of group `name` whose values are listed."""
    wanted = set(values or [])
    for element in form.find_all(["input", "select"], attrs={"name": name}):
        if element.name == "select":
            for option in element.find_all("option"):
                _set_flag(option, "selected", option_value(option) in wanted)
        elif _input_type(element) == "checkbox":
            _set_flag(element, "checked", element.get("value", "on") in wanted)
