# nasclient

Typed building blocks for talking to the TrueNAS middleware API: the wire
message format, the errors it reports, dataclasses for the records it
returns, and async wrappers around its alert, API key, application,
authentication, boot pool and certificate methods.

## Installing

```
pip install nasclient
```

The package has no runtime dependencies beyond the standard library.

## What it does not do

The package does not open a connection to a TrueNAS machine. It has no
WebSocket transport, no session handshake, no login on connect, no
reconnection and no job polling. The API wrappers work on top of any object
you supply that has these coroutines:

```python
async def call(method, params=None, timeout=None): ...
async def call_job(method, params=None, timeout=None): ...  # used by boot and certificate
```

`call` should send the method and return the decoded result; `call_job`
should start a job, wait for it and return the job's result. Raise the
exceptions from `nasclient.errors` to report failures.

## Using the API wrappers

```python
import asyncio

from nasclient.apikey import APIKeyClient
from nasclient.boot import BootClient


class MyCaller:
    """Connects the wrappers to whatever transport you use."""

    async def call(self, method, params=None, timeout=None):
        ...  # send the request and return its decoded result

    async def call_job(self, method, params=None, timeout=None):
        ...  # start the job, wait for it, return its result


async def main() -> None:
    caller = MyCaller()
    for disk in await BootClient(caller).get_disks():
        print(disk.name, disk.size)
    key = await APIKeyClient(caller).create("backup")
    print(key.id, key.name)


asyncio.run(main())
```

Wrapper classes and their modules:

- `nasclient.alert`: `AlertClient` (`list`, `dismiss`, `restore`,
  `list_categories`, `list_policies`, `get_alert_classes_config`,
  `update_alert_classes`) and `AlertServiceClient` (`list`, `get`, `create`,
  `update`, `delete`, `test`, `list_types`).
- `nasclient.apikey`: `APIKeyClient` (`list`, `get`, `create`, `update`,
  `update_name`, `reset`, `delete`).
- `nasclient.app`: `AppClient` (`list`, `list_with_options`, `get`,
  `get_by_id`, `query_by_state`, `query_by_catalog`, `query_with_filters`,
  `list_running`, `list_stopped`, `list_deploying`, `list_crashed`).
- `nasclient.auth`: `AuthClient` (`login`, `login_with_api_key`, `logout`,
  `check_password`, `generate_token`).
- `nasclient.boot`: `BootClient` (`get_disks`, `get_state`, `attach`,
  `detach`, `replace`, `scrub`, `get_scrub_interval`, `set_scrub_interval`).
- `nasclient.certificate`: `CertificateClient` (`list`, `get`, `create`,
  `update`, `delete`, and the `get_*_choices` and `get_profiles` lookups).

Records such as `Alert`, `APIKey`, `App`, `BootState` or `Certificate` are
built with `from_dict`; request types such as `APIKeyUpdateRequest` or
`CertificateCreateRequest` produce their parameters with `to_dict`, leaving
out fields that are unset. Lookups by id or name raise `NotFoundError` when
nothing matches.

## Wire messages

`nasclient.protocol.Message` models one protocol frame. `Message.from_json`
and `Message.to_json` convert to and from JSON text, and
`Message.decode_result` returns the decoded result. `parse_datetime` reads
RFC 3339 strings and `{"$date": ms}` objects into aware datetimes;
`format_datetime` writes them back; `try_dumps` encodes a value as compact
JSON, or returns an empty string if it cannot.

## Errors

All errors derive from `nasclient.errors.TrueNASError`:

- `APIError` carries the code, message, reason and type the server sent.
- `NotFoundError` is raised when a lookup by id or name finds nothing.
- `NotConnectedError` is for a call made without a live connection.
- `ClientClosedError` is for a call cut short by closing the client.
- `JobFailedError` is for a job that ended in failure.

## Running the tests

```
pip install -e ".[test]"
pytest
```