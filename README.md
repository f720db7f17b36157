# mhyscan

Building blocks for confirming game QR-code logins from Python.

## What is inside

- `mhyscan.jsonvalue`: `Json` is a small JSON value type with `Json.parse`,
  `Json.dumps`, item access that creates missing containers,
  `append`, `remove`, `clear`, `as_bool` / `as_int` / `as_float` /
  `as_str` and `obj_to_map`. `Parser` is the parser it uses. Strings keep
  their escape sequences as written, so parsed text round-trips unchanged.
  Object keys are written in sorted order. Malformed text and wrong-type
  access raise `JsonError`.
- `mhyscan.log`: level-filtered logging with `log_trace`, `log_debug`,
  `log_info`, `log_critica`, `log_warn`, `log_error`, `log_fatal` and
  `generic_log`. `set_log_level` sets the lowest level printed to stdout.
  `set_log_file` appends every record to a file, and `None` stops that.
  The starting level is read from the `TRRLOG_LEVEL` environment variable
  and defaults to debug. Each call returns the record it wrote.
- `mhyscan.cryptokit`:
  - `hmac_sha256` and `md5` return lower-case hex digests.
  - `rsa_encrypt` encrypts with a PEM public key using PKCS#1 v1.5 and returns base64 text.
  - `format_rsa_public_key` rewraps a single-line PEM key into 64-character lines.
- `mhyscan.httpclient`: `HttpClient` with `get_request` and `post_request`.
  Both return the body as text. Certificates are not verified and the
  timeout is 10 seconds. Failures raise `HttpError`. The client can be used
  as a context manager. `map_to_query_string` and `query_string_to_map`
  convert between dicts and `a=1&b=2` text without escaping.
- `mhyscan.config`: `ConfigStore` keeps the JSON settings text in a file,
  by default `./Config/userinfo.json`. When that file is missing it writes
  a default one. `update_config` rewrites the file.
  `ConfigStore.get_instance()` returns one shared store at the default path.
- `mhyscan.mihoyosdk`: `MihoyoSdk`, an `HttpClient`, signs and sends the
  verify, scan-check and scan-confirm requests for the Honkai 3 BiliBili
  channel. Results come back as `ScanRet`. Server addresses and the signing
  key are given through `Endpoints`; none are built in.

## Install

```
pip install .
pip install ".[test]"   # with test dependencies
```

## Example

```python
from mhyscan.jsonvalue import Json
from mhyscan.cryptokit import hmac_sha256

doc = Json.parse('{"b": 1, "a": [true, null]}')
print(doc.dumps())            # {"a":[true,null],"b":1}
print(doc["b"].as_int())      # 1

print(hmac_sha256("message", "secret"))
```

```python
from mhyscan.mihoyosdk import Endpoints, MihoyoSdk, ScanRet

sdk = MihoyoSdk(Endpoints(
    v2_login="https://login.example.com/v2/login",
    qrcode_scan="https://api.example.com/qrcode/scan",
    qrcode_confirm="https://api.example.com/qrcode/confirm",
    oa_server="https://dispatch.example.com",
    sign_key="placeholder",
))
sdk.set_oa_server()
login_data = sdk.verify("1", "token")
sdk.set_user_name("name")
sdk.scan_init("ticket-from-qr-code-1234", login_data)
if sdk.scan_check() is ScanRet.SUCCESS:
    print(sdk.scan_confirm())
```

## What it does not do

The package has no way to find a QR code by itself. It does not capture the
screen, read a live video stream, or decode QR images. It has no window or
other user interface, and it installs no command. You must supply the ticket
from a scanned code, along with the server addresses in `Endpoints`.

## Tests

```
pytest
```