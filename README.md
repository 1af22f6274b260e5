# cloudless

Building blocks for serverless data processing in plain Python.

`cloudless` gives you the pieces that a storage- or message-triggered
function needs around its payload: URL-addressed storage, readers that
decompress `.gz` data on the fly, processing settings with deadlines and
retry locations, processing requests built from cloud events, sorting of
CSV or JSON lines, a lazily opened line writer, key extraction for data
synchronisation, and HTTP route matching in the style of an API gateway.

It has no third-party dependencies.

## Installation

```
pip install cloudless
```

To run the test suite, install the `test` extra:

```
pip install "cloudless[test]"
pytest
```

## What is inside

### Storage and I/O

- `cloudless.storage` – `FileSystem` stores data under `mem://` URLs (in
  memory; shared between instances unless created with `isolated=True`),
  `file://` URLs and plain local paths. It offers `open_url`, `exists`,
  `object`, `list`, `upload`, `download`, `delete`, `move`, `copy` and
  `new_writer` (the content is stored when the writer is closed). Entries
  are `StorageObject`s with `url`, `name`, `is_dir`, `mod_time` and `size`.
  URL helpers: `url_scheme`, `url_path`, `url_base`, `url_join`,
  `url_split`.
- `cloudless.ioutil` – `open_url(fs, url)` and `data_reader(reader, url)`
  return a readable stream that decompresses content when the URL ends with
  `.gz`; `BytesSliceReader` reads a list of byte chunks as one stream;
  `ReadCloser` and `WriterCloser` close a wrapping stream together with the
  stream it wraps.

### Processing building blocks

`cloudless.processor` holds:

- `config` – `Config` with concurrency, batch size, retry, failed,
  corruption and destination URLs, sort settings and time limits.
  `init()` fills in defaults (9 minutes max execution, 1% deadline
  reduction and loader lag, 10 retries, concurrency 20, gzip codec for
  `.gz` destinations), `validate()` raises `ValueError` when a required URL
  is missing, `deadline()` and `loader_deadline()` compute time limits
  (honouring the `FUNCTION_TIMEOUT_SEC` environment variable), and
  `expand_destination()` returns a `Stream` (with an optional `Rotation`)
  whose URL placeholders are resolved.
- `urls` – `expand_url()` replaces `$UUID` and `$TimePath`;
  `expand_retry_url()` marks a URL with the next retry number, e.g.
  `numbers-retry01.txt`.
- `request` – `Request` and `new_request()`. `Request.retry()` reads the
  retry counter from names such as `data-retry05.csv`, and
  `transform_source_url()` moves the source path under another base URL.
- `sort` – `Sort`, `Spec` and `Field` order CSV or JSON lines by one or more
  fields, numerically or as text.
- `writer` – `Writer`, a line writer that opens its destination on the
  first write and gzip-compresses `.gz` URLs.
- `adapters` – `S3Event`, `SQSEvent`, `GSEvent` and `PubSubMessage` turn
  event payloads into `Request`s; message data is base64-decoded when it is
  valid base64.
- `subscriber_config` – `SQSConfig` and `PubSubConfig` hold consumer
  settings with defaults and validation.
- `registry` – `register()` and `row_type()` map names to row types.
- `stat` – `Values` collects metric values; `Subscriber` maps them to
  counter positions.

### Synchronisation helpers

- `cloudless.sync.checksum` – `Checksum` maps record keys (int or str) to
  content hashes; `Checksums` keeps one per asset URL, thread-safely.
- `cloudless.sync.extractor` – `int_key_json_extractor`,
  `string_key_json_extractor` and `composite_key` read key values from raw
  JSON lines without decoding them fully.

### Gateway routing

- `cloudless.gateway.matcher` – `Matcher` finds routes by method and URI,
  supporting `{param}` and `*` segments; `as_relative()` strips leading
  slashes and the query string.
- `cloudless.gateway.router` – `Route`, `Resource`, `Security`, and
  `Router.find_route(method, request_uri)`, which raises `LookupError` when
  no single route matches.
- `cloudless.gateway.proxy` – `HTTPRequest.proxy_request()` builds a
  `ProxyRequest` event (ASCII bodies as text, others base64-encoded),
  `new_response()` turns a `ProxyResponse` into an `HTTPResponse`, and
  `extract_uri_parameters()` reads `{name}` segments from a URI.

## Example

```python
import io

from cloudless.gateway.router import Route, Router
from cloudless.processor.sort import Field, Sort, Spec
from cloudless.processor.writer import Writer
from cloudless.storage import FileSystem

ordered = Sort(spec=Spec(format="csv", delimiter=","),
               by=[Field(index=1, is_numeric=True)])
data = ordered.order(io.BytesIO(b"zz,3,abc\ncc,1,xyz\nbb,2,kdl")).read()
assert data == b"cc,1,xyz\nbb,2,kdl\nzz,3,abc"

fs = FileSystem(isolated=True)
writer = Writer("mem://localhost/out/data.txt", fs)
writer.write(b"first")
writer.write(b"second")
writer.close()
assert fs.download("mem://localhost/out/data.txt") == b"first\nsecond"

router = Router([Route(uri="/events/{id}", http_method="GET")])
assert router.find_route("GET", "/events/7").uri == "/events/{id}"
```

## What it does not do

- There is no processing service: nothing here runs a processor over a
  request's lines, spreads them across workers, or writes retry and
  corruption data by itself. `Config`, `Request`, `Sort` and `Writer` are
  the pieces such a service would use.
- There is no change tracker for storage locations and no synchronisation
  service that reads files; `cloudless.sync` provides only checksums and key
  extractors.
- There are no queue or subscription consumers; `SQSConfig` and
  `PubSubConfig` only hold their settings. Nothing invokes remote
  functions, serves HTTP or exposes a metrics endpoint.
- `FileSystem` handles only `mem://`, `file://` and local paths. The event
  adapters accept any object with the same methods, so reading `s3://` or
  `gs://` objects needs such a storage object supplied by you.
- There is no command-line program.