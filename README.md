# termprompt

A library for interactive command-line prompts with a completion drop-down,
input history and Emacs-style editing keys.

The prompt draws its own completion window under the cursor with VT100 escape
sequences and measures wide characters (CJK text, for example) with `wcwidth`.
Input is read from the controlling terminal in raw mode on POSIX systems, and
through `msvcrt` on Windows.

## Features

- A completion window that scrolls and has a scrollbar. Tab and the Down arrow
  select the next suggestion, Shift+Tab and the Up arrow the previous one.
  Pressing any other key inserts the selected suggestion.
- History that you browse with Up/Down or Ctrl+P/Ctrl+N while no suggestion is
  selected.
- Common keys: Home, End, Delete, Backspace, Left and Right.
- Emacs keys (on by default): Ctrl+A, Ctrl+E, Ctrl+F, Ctrl+B, Ctrl+D, Ctrl+H,
  Ctrl+K, Ctrl+U, Ctrl+W and Ctrl+L.
- Ctrl+C discards the current line; Ctrl+D on an empty line ends the prompt.
- Your own key bindings, matched either by named key (`KeyBind`) or by raw byte
  sequence (`ASCIICodeBind`).
- Suggestion filters: prefix, suffix, substring and fuzzy.
- A completer for file-system paths.
- A live prefix that can change after each line.
- Separate colours for the prefix, the input, the suggestions, the
  descriptions and the scrollbar.

## Quick start

Write a *completer*: it receives a `Document` that describes the current
input and returns a sequence of `Suggest` items. Pass it to `read_input`:

```python
from termprompt.document import Document
from termprompt.filter import Suggest, filter_has_prefix
from termprompt.prompt import read_input

SUGGESTIONS = [
    Suggest("users", "Store the username and age"),
    Suggest("articles", "Store the article text posted by user"),
    Suggest("comments", "Store the text commented to articles"),
    Suggest("groups", "Combine users with specific rules"),
]


def completer(document: Document):
    word = document.get_word_before_cursor()
    return filter_has_prefix(SUGGESTIONS, word, True)


answer = read_input(">>> ", completer)
print("Your input: " + answer)
```

`read_input` returns an empty string when the user presses Ctrl+D on an empty
line, or when an exit checker stops the prompt.

### Picking from fixed choices

`choose` completes from a fixed list of strings, filtered by
case-insensitive prefix:

```python
from termprompt.prompt import choose

colour = choose("colour> ", ["red", "green", "blue"])
```

## Options

`Prompt`, `read_input` and `choose` take any number of options after their
fixed arguments. Each option is made by a function in `termprompt.prompt`:

```python
from termprompt.prompt import (
    option_history,
    option_max_suggestion,
    option_title,
    read_input,
)

answer = read_input(
    ">>> ",
    completer,
    option_title("sql-prompt"),
    option_history(["SELECT * FROM users;"]),
    option_max_suggestion(10),
)
```

| Option | Effect |
| --- | --- |
| `option_prefix(x)` | Text shown in front of the input (default `"> "`) |
| `option_live_prefix(f)` | `f()` returns `(prefix, use_it)`; when `use_it` is true, `prefix` replaces the fixed one |
| `option_title(x)` | Terminal window title |
| `option_initial_buffer_text(x)` | Text already in the input when the prompt opens |
| `option_history(x)` | Earlier inputs to start the history with |
| `option_max_suggestion(x)` | Largest number of rows the completion window shows (default 6) |
| `option_completion_word_separator(x)` | Characters that end the word being completed (only a space when empty) |
| `option_completion_on_down()` | Let the Down arrow open the completion window |
| `option_show_completion_at_start()` | Compute suggestions as soon as the prompt opens |
| `option_switch_key_bind_mode(m)` | `KeyBindMode.COMMON` (common keys only) or `KeyBindMode.EMACS` (the default) |
| `option_add_key_bind(*binds)` | Add `KeyBind` entries bound to `Key` values |
| `option_add_ascii_code_bind(*binds)` | Add `ASCIICodeBind` entries bound to raw byte sequences |
| `option_break_line_callback(fn)` | Call `fn(document)` each time a line is broken |
| `option_set_exit_checker_on_input(fn)` | `fn(text, breakline)` returns true when the prompt should stop |
| `option_parser(x)` / `option_writer(x)` | Replace the `ConsoleParser` or `ConsoleWriter` |

Colour options take a `Color` from `termprompt.output`:
`option_prefix_text_color`, `option_prefix_background_color`,
`option_input_text_color`, `option_input_bg_color`,
`option_preview_suggestion_text_color`, `option_preview_suggestion_bg_color`,
`option_suggestion_text_color`, `option_suggestion_bg_color`,
`option_selected_suggestion_text_color`, `option_selected_suggestion_bg_color`,
`option_description_text_color`, `option_description_bg_color`,
`option_selected_description_text_color`, `option_selected_description_bg_color`,
`option_scrollbar_thumb_color` and `option_scrollbar_bg_color`.

## A read–execute loop

`Prompt(executor, completer, *options)` calls `executor(line)` for every line
entered. `Prompt.run()` keeps reading until Ctrl+D is pressed on an empty line
or the exit checker returns true. SIGINT and SIGQUIT end it with exit status
0 and SIGTERM with status 1 (raised as `SystemExit`); SIGWINCH redraws the
prompt at the new size. `Prompt.input()` reads a single line and returns it.
`Prompt.feed(data)` processes one chunk of raw input without a terminal.

If the terminal is too small for the prompt and its completion window, the
prompt shows "Your console window is too small..." instead.

## Filters

`termprompt.filter` provides `filter_has_prefix`, `filter_has_suffix`,
`filter_contains` and `filter_fuzzy`. Each takes the suggestions, the text to
match and an `ignore_case` flag; an empty text keeps every suggestion. A fuzzy
search for `"dog"` matches any text containing `d`, `o` and `g` in that order.

## File path completion

`termprompt.file_completer.FilePathCompleter` suggests directory entries for
the word before the cursor. It expands `~/` and `$VAR` / `${VAR}`, can take a
`filter` over `os.DirEntry` values and an `ignore_case` flag, and caches each
directory's listing. Set `option_completion_word_separator` to
`FILE_PATH_COMPLETION_SEPARATOR` so that completion restarts after each path
separator.

## Working without a terminal

`termprompt.document.Document`, `termprompt.buffer.Buffer`,
`termprompt.history.History` and `termprompt.completion.CompletionManager`
need no terminal, which makes completers and key bindings easy to test.
`termprompt.keys.get_key` maps raw terminal bytes to a `Key`, and
`termprompt.output.VT100Writer` collects escape sequences in memory; its
`flush()` returns them.

## What it does not do

The package is a library and has no command of its own. It has no undo, no
yank of cut text, and no bindings for swapping characters or words, although
`Buffer.swap_characters_before_cursor()` is there to bind yourself.

## Debugging

Set `TERMPROMPT_ENABLE_LOG` to `1` or `true` to write internal log lines to
`termprompt.log` in the current directory. Set `TERMPROMPT_ENABLE_ASSERT` to
`1` or `true` to make internal consistency checks raise
`termprompt.debug.AssertionFailure` instead of only being logged.