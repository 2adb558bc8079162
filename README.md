# fetchkit

fetchkit is a library for gathering system information on Linux and printing it
the way terminal "fetch" tools do: a key, a separator and a value, optionally
shaped by a user-supplied format string and cached between runs.

It detects:

- the operating system from `os-release` / `lsb-release` files, including
  Ubuntu flavours (`fetchkit.os_release`)
- the session protocol (Wayland, X11, TTY) from the environment, screen
  resolutions from DRM, and the window manager and desktop environment
  (`fetchkit.displayserver`, `fetchkit.wmde`)
- KDE Plasma and GTK theme, icon, font and cursor settings
  (`fetchkit.plasma`, `fetchkit.gtk`)
- the terminal and shell the program runs in, and shell versions
  (`fetchkit.terminal_shell`)
- hardware monitor temperatures (`fetchkit.temps`)
- the current date and time split into its parts (`fetchkit.clock`)

## Format strings

`fetchkit.format.parse_format_string(format_string, error, arguments)` fills a
format string with arguments:

- `{}` takes the next argument, `{1}`, `{2}`, ... take an argument by position
- `{{` is a literal `{`
- `{?2} ... {?}` keeps the text only if argument 2 is set (a positive number or
  a non-empty string); `{/2} ... {/}` keeps it only if argument 2 is not set
- `{e}`, `{error}` or `{0}` inserts the error message; `{?e}` / `{/e}` test for it
- `{#31} ... {#}` colours the enclosed text with an SGR code
- `{-}` stops the output at that point

Invalid placeholders are copied to the output as written. Trailing spaces are
removed and a colour reset is appended to the result.

```python
from fetchkit.format import parse_format_string

text = parse_format_string("{1} on {2}", None, ["Linux", "x86_64"])
# "Linux on x86_64" followed by the reset sequence "\033[0m"
```

## Small parsers

```python
from fetchkit.parsing import parse_gtk, parse_semver
from fetchkit.font import font_from_pango, font_from_qt

parse_semver("", "2", "")                 # "1.2"
parse_gtk("Adwaita", "Adwaita", "")       # "Adwaita [GTK2/3]"

font = font_from_qt("Noto Sans,10,-1,5,50,0,0,0,0,0")
font.pretty                               # "Noto Sans (10pt)"

font_from_pango("Cantarell Bold 11").pretty
```

Key/value configuration files are read with `fetchkit.properties`:
`parse_prop_line`, `parse_prop_lines`, `parse_prop_file`,
`parse_prop_file_values` with a list of `PropQuery` objects, and
`parse_prop_file_home_values` / `parse_prop_file_config_values`, which look
below a home directory or through a list of config directories in order.

Other helpers: `fetchkit.fileio` (reading and writing files, suppressing
output, querying the terminal), `fetchkit.processing.process_stdout` (run a
program and collect its output) and `fetchkit.networking.http_get` (a single
plain HTTP GET on port 80).

## Detecting the desktop

```python
from fetchkit.instance import create_instance
from fetchkit.os_release import detect_os
from fetchkit.wmde import connect_display_server

instance = create_instance()
os_info = detect_os(instance)
display = connect_display_server(instance)

print(os_info.pretty_name)
print(display.wm_pretty_name, display.de_pretty_name)
for resolution in display.resolutions:
    print(resolution.width, resolution.height, resolution.refresh_rate)
```

`create_instance` builds an `Instance` holding a default `Config` and a `State`
with the home directory, the XDG config directories and the cache directory
(created under `$XDG_CACHE_HOME` or `~/.cache`). Functions that look at the
environment accept an `env` mapping, so detection can be run against a
prepared environment instead of `os.environ`.

`console_session(config)` is a context manager that hides the cursor and turns
off line wrapping for the duration of the output, as the configuration asks,
and restores the terminal afterwards.

## Printing and caching

`fetchkit.output.Printer` prints module lines as `key` + separator + value,
where the key is the module name (followed by its index when there are
several lines) or a custom key format. It shows errors only when
`Config.show_errors` is set, and keeps a per-module cache of whole values and
of format arguments in the cache directory (`print_and_write_to_cache`,
`open_cache` with `print_and_append_to_cache`, and `print_from_cache`).

`validate_cache(cache_dir, version)` tells whether the cache must be rebuilt:
it returns True when recaching is requested or when the recorded version
differs from `version`, in which case it records the new version.

## What fetchkit does not do

- It has no command-line program; it is used as a library.
- It prints no logos and has no modules for CPU, GPU, memory, disks,
  batteries, packages, networks or media players.
- It does not talk to X11 or Wayland servers, GSettings or dconf: the session
  protocol comes from environment variables, resolutions only from DRM, and
  GTK settings only from configuration files.
- Detections run in the calling thread; nothing runs in the background.

## Requirements

Python 3.10 or newer on Linux. fetchkit has no third-party dependencies.