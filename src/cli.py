"""Key-driven REPL over a TaskPicker.

Each cycle clears the screen, draws the listing, reads one line and
dispatches its first token. Every operation on the store is durable on its
own, so there is nothing to save on exit.
"""
import logging
from typing import Dict, Optional
from errors import TrackerError, UnrecognizedCommand
from picker import LEGEND, TaskPicker, render_task
from theme import color, DIM, ERROR_COLOR, HEADER_COLOR, SELECTED_STYLE, STATUS_COLOR

logger = logging.getLogger(__name__)

# --- terminal control helpers ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home)
def _clear_screen() -> None:
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


# key -> TaskPicker method
KEYMAP: Dict[str, str] = {
    'j': 'down',
    'k': 'up',
    'g': 'top',
    'G': 'bottom',
    'h': 'left',
    'l': 'right',
    'd': 'remove',
}

COMMAND_ALIASES: Dict[str, str] = {
    'down': 'j',
    'up': 'k',
    'top': 'g',
    'bottom': 'G',
    'retreat': 'h',
    'advance': 'l',
    'rm': 'd',
    'remove': 'd',
    'add': 'a',
    'help': '?',
    'quit': 'q',
    'exit': 'q',
}

QUIT_KEY = 'q'


class CLI:
    def __init__(self, picker: TaskPicker, alt_screen: bool = True):
        self.picker: TaskPicker = picker
        self.alt_screen: bool = alt_screen

    def run(self) -> None:
        """Main loop; the listing is cleared and redrawn every cycle.

        Errors raised by the core are shown beneath the listing and the loop
        continues. 'q', EOF or Ctrl-C leave the loop.
        """
        message: Optional[str] = None
        exit_message = "Goodbye."
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                self._draw(message)
                message = None
                line = input("\n: ")
                if not line.strip():
                    continue
                if self._normalize(line) == QUIT_KEY:
                    break
                try:
                    message = self._handle_command(line)
                except TrackerError as exc:
                    logger.info('Command %r failed: %s', line, exc)
                    message = str(exc)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
        print(exit_message)

    # -------------------- drawing --------------------
    def _draw(self, message: Optional[str] = None) -> None:
        _clear_screen()
        print(color(LEGEND, HEADER_COLOR))
        print()
        tasks = self.picker.store.sorted()
        if not tasks:
            print(color('(empty)', DIM))
        for rank, task in enumerate(tasks):
            selected = rank == self.picker.position
            styles = [STATUS_COLOR[task.status]]
            if selected:
                styles.append(SELECTED_STYLE)
            print(color(render_task(task, selected), *styles))
        if message:
            print("\n" + color(message, ERROR_COLOR))

    # -------------------- command dispatch --------------------
    @staticmethod
    def _normalize(line: str) -> str:
        key = line.strip().split(maxsplit=1)[0]
        return COMMAND_ALIASES.get(key.lower(), key)

    def _handle_command(self, line: str) -> Optional[str]:
        """Run one command line. Returns a message to display, if any;
        core failures propagate as TrackerError."""
        tokens = line.strip().split(maxsplit=1)
        if not tokens:
            return None
        key = self._normalize(line)
        if key in KEYMAP:
            getattr(self.picker, KEYMAP[key])()
            return None
        if key == 'a':
            return self._cmd_add(tokens[1] if len(tokens) > 1 else '')
        if key == '?':
            _clear_screen()
            self._help()
            input("\nPress Enter to return to the list...")
            return None
        raise UnrecognizedCommand(tokens[0])

    def _cmd_add(self, name: str) -> Optional[str]:
        name = name.strip()
        if not name:
            name = input("Enter task name: ").strip()
        if not name:
            return "Name required."
        self.picker.create(name)
        return None

    def _help(self) -> None:
        print("Keys:")
        print("  j / k         Move selection down / up")
        print("  g / G         Jump to top / bottom")
        print("  l / h         Advance status (Wont > Open > Done) / retreat it")
        print("  a [name...]   Add a task (prompts for name if omitted)")
        print("  d             Remove the selected task")
        print("  ?             Show this help")
        print("  q             Quit")
        print("Long forms: down, up, top, bottom, advance, retreat, add, rm, help, quit")
