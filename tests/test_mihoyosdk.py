import pytest
import responses

from mhyscan.cryptokit import hmac_sha256
from mhyscan.httpclient import HttpError
from mhyscan.jsonvalue import Json
from mhyscan.mihoyosdk import Endpoints, MihoyoSdk, ScanRet

ENDPOINTS = Endpoints(
    v2_login="https://sdk.example.com/login",
    qrcode_scan="https://sdk.example.com/scan",
    qrcode_confirm="https://sdk.example.com/confirm",
    oa_server="https://oa.example.com/",
    sign_key="secret",
)

BH_INFO = '{"retcode":0,"data":{"open_id":"42","combo_id":"7","combo_token":"token"}}'


@pytest.fixture
def sdk():
    return MihoyoSdk(ENDPOINTS)


def _sent_json(call):
    return Json.parse(call.request.body.decode("utf-8"))


def test_bh3_sign_ignores_backslashes(sdk):
    assert sdk.bh3_sign("a\\b\\c") == sdk.bh3_sign("abc")
    assert sdk.bh3_sign("abc") == hmac_sha256("abc", "secret")


def test_make_sign_worked_example(sdk):
    signed = Json.parse(sdk.make_sign('{"b":"x","a":1,"sign":""}'))
    assert signed["sign"].as_str() == hmac_sha256('a=1&b="x"', "secret")
    assert signed["a"].as_int() == 1


def test_make_sign_unquotes_data_and_device(sdk):
    text = sdk.make_sign('{"device":"0000","data":"d","app_id":1}')
    expected = hmac_sha256("app_id=1&data=d&device=0000", "secret")
    assert text == '{"app_id":1,"data":"d","device":"0000","sign":"' + expected + '"}'


def test_validity_check(sdk):
    sdk.scan_init("ticket-1", BH_INFO)
    assert sdk.validity_check("ticket-1") is True
    assert sdk.validity_check("ticket-2") is False


def test_verify_posts_signed_body(sdk):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, ENDPOINTS.v2_login, body=BH_INFO)
        assert sdk.verify("5", "token") == BH_INFO
        body = _sent_json(rsps.calls[0])
    assert body["data"].as_str() == r'{\"access_key\":\"token\",\"uid\":5}'
    assert body["channel_id"].as_int() == 14
    unsigned = Json.parse(body.dumps())
    unsigned.remove("sign")
    assert Json.parse(sdk.make_sign(unsigned.dumps()))["sign"] == body["sign"]


@pytest.mark.parametrize("retcode, expected", [(0, ScanRet.SUCCESS), (-106, ScanRet.FAILURE_1)])
def test_scan_check(sdk, retcode, expected):
    sdk.scan_init("ticket-1", BH_INFO)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, ENDPOINTS.qrcode_scan, body='{"retcode":%d}' % retcode)
        assert sdk.scan_check() is expected
        body = _sent_json(rsps.calls[0])
    assert body["ticket"].as_str() == "ticket-1"
    assert body["app_id"].as_str() == "1"


def test_set_oa_server_empty_reply_raises(sdk):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, ENDPOINTS.oa_server, body="")
        with pytest.raises(HttpError):
            sdk.set_oa_server()


@pytest.mark.parametrize("retcode, expected", [(0, ScanRet.SUCCESS), (-1, ScanRet.FAILURE_2)])
def test_scan_confirm(sdk, retcode, expected):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, ENDPOINTS.oa_server, body="dispatch")
        rsps.add(responses.POST, ENDPOINTS.qrcode_confirm, body='{"retcode":%d}' % retcode)
        sdk.set_oa_server()
        sdk.set_user_name("player")
        sdk.scan_init("ticket-9", BH_INFO)
        assert sdk.scan_confirm() is expected
        body = _sent_json(rsps.calls[1])
    assert body["ticket"].as_str() == "ticket-9"
    ext = body["payload"]["ext"].as_str()
    raw = body["payload"]["raw"].as_str()
    assert '\\"accountToken\\":\\"token\\"' in ext
    assert '\\"dispatch\\":\\"dispatch\\"' in ext
    assert '\\"asterisk_name\\":\\"player\\"' in raw
    assert '\\"open_id\\":\\"42\\"' in raw
    assert body["payload"]["proto"].as_str() == "Combo"