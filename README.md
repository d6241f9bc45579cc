# grimoire

Small building blocks that keep turning up in everyday tooling work:

- listing files in a directory or a whole tree, with extension filters
- copying a list of relative paths from one root to another
- finding the line and column just past the end of a text, counted in
  grapheme clusters
- running every executable file found under a directory
- test cases kept as files in a directory
- rendering Jinja templates that always return a string: the output, or an
  HTML page describing the error
- logging to stdout, stderr, and rolling text and JSON-lines files, with
  named spans
- dates and times in common string formats
- two minimal language servers speaking LSP over stdin and stdout

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Listing and copying files (`grimoire.file_lists`)

```python
from grimoire.file_lists import get_files_in_dir, get_files_in_tree, copy_file_list_from_to

# Non-hidden files directly inside "notes", relative to "notes", sorted.
top_level = get_files_in_dir("notes")

# Every file in the tree with an .html extension (case-insensitive), sorted.
pages = get_files_in_tree("site", with_ext=["html"])

# Copy them into another root, leaving existing files alone.
copy_file_list_from_to(pages, "site", "build", overwrite=False)
```

- `get_files_in_dir` does not enter sub-directories. Its extension filters
  compare exactly, and when either filter is given, files without an
  extension are dropped.
- `get_files_in_tree` skips hidden files and everything inside hidden
  directories. Its filters ignore case and never drop a file that has no
  extension. It raises `NotADirectoryError` when the path is not a
  directory.
- `copy_file_list_from_to` creates parent directories as needed and reads
  and writes the file contents rather than using a filesystem copy, so file
  watchers see a plain content change. Existing files are replaced only with
  `overwrite=True`.

## End-of-text position (`grimoire.last_position`)

```python
from grimoire.last_position import last_position

last_position("")        # (0, 0)
last_position("a\nb")    # (1, 1)
last_position("abc\n")   # (1, 0)
last_position("\n\na b c")  # (2, 5)
```

The result is the zero-based line and the column just past the last
character, counted in grapheme clusters, so a combined emoji or an accented
letter counts once. A trailing newline starts a new, empty last line.

```
grimoire-last-position "some text"
```

prints the position of its argument (of an empty text when none is given).

## Running scripts in a directory (`grimoire.scripts`)

```python
from grimoire.scripts import find_scripts, run_scripts

find_scripts("hooks")            # executable, non-hidden files, sorted
processes = run_scripts("hooks") # list of started subprocess.Popen objects
```

Each script is started as `./<name>` from within its own directory. The
scripts are not waited for. `NotADirectoryError` is raised when the path is
not a directory.

```
grimoire-run-scripts hooks
```

With no argument the command uses `test-dirs/1`. It exits with status 1 and
prints the error if the directory cannot be read or a script cannot start.

## Directory-driven test cases (`grimoire.test_dir`)

A `.customtest` file holds an input and an expected value separated by
`_____`; both are stripped of surrounding whitespace.

```python
from grimoire.test_dir import collect_test_cases, read_test_case, widget_testing

for case in collect_test_cases("cases"):
    case.check(widget_testing)
```

`collect_test_cases` reads every `.customtest` file directly inside the
directory, sorted by path; each `DirTestCase` is named after its file stem.
`DirTestCase.check` calls the function on the input and compares the result
with the expected value, read as JSON where it parses (`true`, `3`, `"x"`)
and as plain text otherwise. It returns the result or raises
`AssertionError`. `read_test_case` raises `ValueError` when a file has no
separator. `widget_testing` returns whether its text is `hello`.

## Rendering templates without failing (`grimoire.renderer`)

`Renderer` wraps a Jinja environment (`renderer.env`) that uses
`[! ... !]` for blocks, `[@ ... @]` for variables and `[# ... #]` for
comments.

```python
from grimoire.renderer import Renderer

renderer = Renderer()
renderer.add_template("greeting", "Hello, [@ name @]!")
renderer.render_content("greeting", {"name": "world"})   # "Hello, world!"
assert not renderer.errors()
```

- `add_template` checks the template's syntax before adding it.
- `add_template_dir` loads templates from a directory; templates added by
  name take precedence.
- `add_template_from_path` adds the template held in one file.
- `render_content` returns the rendered text or, when the template is
  missing or rendering fails, an HTML error page holding the error text.
  `set_error_template(fmt)` replaces that page with `fmt`, in which `{}` is
  replaced by the error text.

Every step appends a `RendererStatus` (with a `StatusKind`) to
`renderer.log`; `renderer.errors()` returns the entries for which
`is_error()` is true.

## Logging (`grimoire.logger`)

```python
import logging
from grimoire.logger import Logger, span

guards = (
    Logger.setup()
    .with_stdout(logging.INFO)
    .to_json_dir("logs/json", "INFO")
    .to_txt_dir("logs/txt", "INFO")
    .init()
)

with span("work"):
    logging.getLogger(__name__).info("In work")
```

- Levels are given as numbers or as `TRACE`, `DEBUG`, `INFO`, `WARN`,
  `WARNING` or `ERROR`.
- `init` installs the outputs on the root logger and returns the file
  handlers. It raises `RuntimeError` if outputs are already installed.
- Console and text-file records use `MiniFormatter`: level and UTC time,
  then source file, line and enclosing span names, then the message.
  JSON-lines files use `JsonFormatter`: one object per record with
  `timestamp`, `level`, `fields`, `target` and the active spans.
- Files are named after the current day (`log.<date>.json-lines`,
  `log.<date>.log`); two files are kept per directory.
- `span(name)` works as a context manager or a decorator.
- `init_logger(log_dir, when="daily", suffix="log")` sends every record as
  JSON lines to rolling files in one directory; `when` is `minutely`,
  `hourly` or `daily`.

```
grimoire-log-demo
```

logs a few records inside nested spans to stdout, stderr and to files under
`test-output/json` and `test-output/txt`.

## Date strings (`grimoire.date_strings`)

`time_format_year`, `simple_clock` (`2:05:06pm`), `am_pm_lc`,
`time_rfc3339`, `time_rfc3339_with_ms` and `time_rfc2822` each take an
optional `datetime` (the current local time by default). `time_tokens`
returns a table of every supported format token applied to a fixed moment.
Month and day names are always English, whatever the locale.

```
grimoire-dates
```

## Smaller pieces

- `grimoire.fuse.refine(items)` replaces each empty string with `None`,
  keeping every item in order. `grimoire-fuse [items...]` prints the result
  to stderr, using a built-in list when no items are given.
- `grimoire.embedded.extract_files(files, output_root)` writes a mapping of
  relative names to bytes or text under a directory, creating parent
  directories and returning the paths written.

## Language servers (`grimoire.lsp`)

```
grimoire-lsp --log-dir logs
```

runs a server on stdin and stdout that logs JSON lines to hourly files
(in the current directory by default). After the initialize handshake it
keeps open documents in memory (full-text sync) and answers:

- `textDocument/completion` with the built-in words that start with the
  text before the cursor
- `textDocument/formatting` with one edit that puts a `.` in front of every
  line lacking one
- `textDocument/semanticTokens/full` with a token for every `alfa`

Other requests get an empty result. It stops on `shutdown` followed by
`exit`, or at the end of input.

```
grimoire-tower-lsp
```

runs a second server that offers two fixed completions, formats by putting
a `.` in front of every line, and answers unknown methods and bad params
with JSON-RPC errors.

The parts live in `grimoire.lsp`: `protocol` (`Content-Length` framing,
`Request`, `Response`, `Notification`, `Connection`), `documents`
(`DocumentData`, `MemDocs`, `GlobalState`), `capabilities`, `text`,
`notifications`, `requests`, `server` and `tower_backend`.

## What it does not do

- `extract_files` only writes out a mapping you pass in; the package does
  not bundle files into itself.
- The language servers support full-document sync only, and handle only
  the methods listed above: no hover, definitions, diagnostics or other
  features.