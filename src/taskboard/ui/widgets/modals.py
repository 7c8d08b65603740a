"""Modal dialogs: confirmation and single-line text prompt."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Center, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label

MODAL_CSS = """
{name} {{
    align: center middle;
}}

{name} > Vertical {{
    width: 56;
    height: auto;
    padding: 1 2;
    background: $surface;
    border: solid $primary;
}}

{name} Label {{
    width: 100%;
    text-align: center;
    margin-bottom: 1;
}}
"""


class ConfirmModal(ModalScreen[bool]):
    """Modal dialog for confirming destructive actions."""

    DEFAULT_CSS = (
        MODAL_CSS.format(name="ConfirmModal")
        + """
    ConfirmModal .buttons {
        width: 100%;
        height: auto;
        align: center middle;
    }

    ConfirmModal Button {
        margin: 0 1;
    }
    """
    )

    BINDINGS = [
        Binding("y", "confirm", "Yes"),
        Binding("n", "cancel", "No"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self.message)
            with Center(classes="buttons"):
                yield Button("Yes", id="yes", variant="error")
                yield Button("No", id="no", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class TextPromptModal(ModalScreen[str | None]):
    """Ask for one line of text.

    Dismisses with the stripped text, or None when cancelled or left blank.
    """

    DEFAULT_CSS = MODAL_CSS.format(name="TextPromptModal")

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, prompt: str, value: str = "") -> None:
        super().__init__()
        self.prompt = prompt
        self.initial_value = value

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self.prompt)
            yield Input(value=self.initial_value, id="prompt-input")

    def on_mount(self) -> None:
        self.query_one("#prompt-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value.strip() or None)

    def action_cancel(self) -> None:
        self.dismiss(None)
