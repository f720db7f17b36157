"""Signed QR-code login requests for the Honkai 3 BiliBili channel."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from typing import ClassVar

from mhyscan.cryptokit import hmac_sha256
from mhyscan.httpclient import HttpClient, HttpError
from mhyscan.jsonvalue import Json
from mhyscan.log import log_debug

_VERIFY_BODY = '{"device":"0000000000000000","app_id":1,"channel_id":14,"data":"","sign":""}'
_SCAN_CHECK = (
    '{"app_id":"1","device":"0000000000000000","ticket":"abab",'
    '"ts":1637593776066,"sign":"abab"}'
)
_SCAN_RESULT = (
    '{"device":"0000000000000000","app_id":1,"ts":1637593776681,'
    '"ticket":"","payload":{},"sign":""}'
)
_SCAN_DATA = '{"accountType":"2","accountID":"","accountToken":"","dispatch":{}}'
_SCAN_RAW = (
    '{"heartbeat":false,"open_id":"","device_id":"0000000000000000","app_id":"1",'
    '"channel_id":"14","combo_token":"","asterisk_name":"name","combo_id":"",'
    '"account_type":"2"}'
)
_SCAN_EXT = '{"data":{}}'
_SCAN_PAYLOAD = '{"raw":"","proto":"Combo","ext":""}'

_UNQUOTED_SIGN_FIELDS = ("data", "device")


class ScanRet(enum.Enum):
    UNKNOW = enum.auto()
    SUCCESS = enum.auto()
    FAILURE_1 = enum.auto()
    FAILURE_2 = enum.auto()
    LIVESTOP = enum.auto()


@dataclass(frozen=True)
class Endpoints:
    """Server addresses and the key used to sign request bodies."""

    v2_login: str
    qrcode_scan: str
    qrcode_confirm: str
    oa_server: str
    sign_key: str


def _escape_quotes(text: str) -> str:
    return text.replace('"', '\\"')


def _strip_quotes(text: str) -> str:
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text


class MihoyoSdk(HttpClient):
    """Verifies a channel account and confirms scanned QR-code tickets."""

    _bh_ver: ClassVar[str] = ""
    _oa_string: ClassVar[str] = ""

    def __init__(self, endpoints: Endpoints) -> None:
        super().__init__()
        self._endpoints = endpoints
        self._ticket = ""
        self._bh_info = ""
        self._scan_raw = _SCAN_RAW
        self._verify_data = {"uid": "1", "access_key": "placeholder"}

    def verify(self, uid: str, access_key: str) -> str:
        """Log the account in and return the server's reply text."""
        log_debug("verify with uid = {}", uid)
        self._verify_data["uid"] = uid
        self._verify_data["access_key"] = access_key
        body_data = '{{\\"access_key\\":\\"{}\\",\\"uid\\":{}}}'.format(
            self._verify_data["access_key"], self._verify_data["uid"]
        )
        body = Json.parse(_VERIFY_BODY)
        body["data"] = body_data
        reply = self.post_request(self._endpoints.v2_login, self.make_sign(body.dumps()))
        log_debug("verify finished: {}", reply)
        return reply

    def set_bh_ver(self, version: str) -> None:
        type(self)._bh_ver = version

    def set_oa_server(self) -> None:
        """Fetch the dispatch data shared by every instance."""
        oa_server = self.get_request(self._endpoints.oa_server)
        if not oa_server:
            raise HttpError("empty reply from the dispatch server")
        type(self)._oa_string = oa_server

    def validity_check(self, ticket: str) -> bool:
        """Return True when ``ticket`` is the one already being handled."""
        return ticket == self._ticket

    def scan_init(self, ticket: str, bh_info: str) -> None:
        self._ticket = ticket
        self._bh_info = bh_info

    def scan_check(self) -> ScanRet:
        """Report the ticket as scanned."""
        check = Json.parse(_SCAN_CHECK)
        check["ticket"] = self._ticket
        check["ts"] = int(time.time())
        feedback = self.post_request(self._endpoints.qrcode_scan, self.make_sign(check.dumps()))
        retcode = Json.parse(feedback)["retcode"].as_int()
        return ScanRet.SUCCESS if retcode == 0 else ScanRet.FAILURE_1

    def scan_confirm(self) -> ScanRet:
        """Confirm the login for the ticket with the verified account."""
        info = Json.parse(Json.parse(self._bh_info)["data"].dumps())

        scan_data = Json.parse(_SCAN_DATA)
        scan_data["dispatch"] = type(self)._oa_string
        scan_data["c"] = info["open_id"]
        log_debug("{}", info["open_id"].as_str())
        scan_data["accountToken"] = info["combo_token"]

        ext = Json.parse(_SCAN_EXT)
        ext["data"] = scan_data

        raw = Json.parse(self._scan_raw)
        raw["open_id"] = info["open_id"]
        raw["combo_id"] = info["combo_id"]
        raw["combo_token"] = info["combo_token"]

        payload = Json.parse(_SCAN_PAYLOAD)
        payload["raw"] = raw
        payload["ext"] = ext

        result = Json.parse(_SCAN_RESULT)
        result["payload"] = payload
        result["ts"] = int(time.time())
        result["ticket"] = self._ticket

        signed = Json.parse(self.make_sign(result.dumps()))
        signed["payload"]["ext"] = _escape_quotes(signed["payload"]["ext"].dumps())
        signed["payload"]["raw"] = _escape_quotes(signed["payload"]["raw"].dumps())
        post_body = signed.dumps()
        log_debug("{}", post_body)

        response = self.post_request(self._endpoints.qrcode_confirm, post_body)
        if Json.parse(response)["retcode"].as_int() == 0:
            return ScanRet.SUCCESS
        return ScanRet.FAILURE_2

    def set_user_name(self, name: str) -> None:
        raw = Json.parse(self._scan_raw)
        raw["asterisk_name"] = name
        self._scan_raw = raw.dumps()

    def make_sign(self, data: str) -> str:
        """Return ``data`` with its ``sign`` member set to the body's signature."""
        body = Json.parse(data)
        pairs = []
        for key, value in body.obj_to_map().items():
            if key == "sign":
                continue
            if key in _UNQUOTED_SIGN_FIELDS:
                value = _strip_quotes(value)
            pairs.append(f"{key}={value}")
        signing_text = "&".join(pairs)
        log_debug("makeSign = {}", signing_text)
        body["sign"] = self.bh3_sign(signing_text)
        return body.dumps()

    def bh3_sign(self, data: str) -> str:
        """HMAC-SHA256 of ``data`` with backslashes removed."""
        return hmac_sha256(data.replace("\\", ""), self._endpoints.sign_key)