# moondeck

Shared pieces of a game streaming companion service, together with the
small stream helper process that runs alongside a streaming session.

## Installing

```
pip install .
```

## Running the stream helper

```
moondeck-stream
moondeck-stream --version
```

`moondeck-stream` (the function `moondeck.stream.main`) refuses to start
and exits with status 1 if another instance already holds its
`SingleInstanceGuard`. Otherwise it writes its log to the path given by
`AppMetadata(App.STREAM).log_path()` (`/tmp/moondeckstream.log` outside
Windows) and keeps a `Heartbeat` beating so that a listener can see that a
stream is in progress. It exits with status 0 when a listener asks it to
terminate through the heartbeat, or on SIGINT/SIGTERM.

## Modules

- `moondeck.enums` – `PcState` and `StreamState`.
- `moondeck.logcategories` – the logger names used by the package
  (`BUDDY_MAIN`, `STREAM_MAIN`, `SERVER`, `SHARED`, `UTILS`, `OS`),
  `get_logger(category)` (INFO level unless configured otherwise) and
  `get_error_string(error)`.
- `moondeck.logsettings` – `get_log_settings()` returns the process-wide
  `LogSettings`. `init(filepath)` installs a
  `[hh:mm:ss.zzz] LEVEL    category: message` format and, given a path,
  deletes any old file there and logs to both stdout and that file.
  `set_logging_rules(rules)` takes lines such as `buddy.os.debug=true` or
  `buddy.*=false`; later rules win.
- `moondeck.appmetadata` – `App` (`BUDDY`, `STREAM`), `config_dir()`
  (`$XDG_CONFIG_HOME` if it exists, else `~/.config`) and `AppMetadata`,
  which gives the app name and the log, settings and autostart paths.
- `moondeck.jsonvalues` – typed, range-checked reading of decoded JSON
  objects: `convert_str`, `convert_bool`, `convert_int`, `convert_uint`,
  `convert_enum`, `get_json_value` (None when missing or invalid) and
  `get_nullable_json_value` (None for an explicit null, `INVALID` when
  missing or invalid).
- `moondeck.appsettings` – `AppSettings(filepath)` reads the JSON settings
  file. If the file is missing or any entry is missing or invalid, it
  writes a file holding the current values and defaults and reads it
  again. Problems that cannot be fixed raise `SettingsError`. Values are
  plain attributes: `port` (default 59999), `logging_rules`,
  `handled_displays`, `sunshine_apps_filepath`, `prefer_hibernation`,
  `ssl_protocol` (an `SslProtocol`), `force_big_picture`,
  `close_steam_before_sleep`, `mac_address_override` and, on Linux,
  `registry_file_override` and `steam_binary_override`.
- `moondeck.clientids` – `ClientIds(filepath)`, a set of paired client ids
  kept as a JSON array, with `load()`, `save()`, `add()`, `remove()` and
  `in`. Unreadable or malformed files raise `ClientIdsError`.
- `moondeck.pairing` – `PairingManager` runs one pairing at a time. The
  hashed id must be the base64 encoding of the client id followed by the
  PIN. `finish_pairing(pin)` stores the id when the PIN matches.
- `moondeck.httpauth` – `get_authorization_id(headers)` reads the client
  id from a `Basic` `Authorization` header. `ApiAuthorizer` checks that id
  against a `ClientIds`.
- `moondeck.sunshineapps` – `SunshineApps(filepath).load()` returns the
  set of app names in a Sunshine `apps.json`, or None if the file cannot
  be read or parsed. `default_apps_path()` gives the usual location.
- `moondeck.heartbeat` – `Heartbeat(key, ...)` shares a timestamp and a
  terminate flag between processes through a file in the temporary
  directory. One side calls `start_beating()`, the other calls
  `start_listening()` and may call `terminate()`. Call `close()` when
  done.
- `moondeck.streamstate` – `StreamStateHandler(heartbeat, ...)` listens to
  a heartbeat and reports `current_state()`. `end_stream()` asks a
  running stream to stop.
- `moondeck.instanceguard` – `SingleInstanceGuard(key, directory=None)`
  with `try_to_run()`, `is_another_running()` and `release()`. It can be
  used as a context manager.
- `moondeck.signals` – `install_signal_handler(callback)` calls the
  callback on the first SIGINT or SIGTERM.

## Example

```python
from moondeck.clientids import ClientIds
from moondeck.pairing import PairingManager
import base64

ids = ClientIds("/tmp/moondeck-example/clients.json")
ids.load()

manager = PairingManager(ids)
hashed = base64.b64encode(b"client-1" + b"1234").decode()
manager.start_pairing("client-1", hashed)
manager.finish_pairing(1234)      # stores "client-1" and saves the file
print(manager.is_paired("client-1"))
```

## What this package does not do

There is no HTTP server and no main service command. `moondeck.httpauth`
only reads and checks client ids from request headers. Nothing here
launches or closes Steam, changes display resolution, shuts down or
suspends the PC, manages autostart entries, shows a tray icon or prompts
the user for a pairing PIN. `PairingManager` only calls the callbacks it
is given.

## Tests

```
pip install .[test]
pytest
```