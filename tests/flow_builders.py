"""Builders for authored flow JSON used across tests."""


def make_screen(screen_id, *children, **extra):
    screen = {
        "id": screen_id,
        "layout": {"type": "SingleColumnLayout", "children": list(children)},
    }
    screen.update(extra)
    return screen


def text_input(name, **extra):
    component = {"type": "TextInput", "name": name, "label": name}
    component.update(extra)
    return component


def footer(action_name, **action_extra):
    action = {"name": action_name}
    action.update(action_extra)
    return {"type": "Footer", "label": "Continue", "on-click-action": action}
