import base64

from src.payments.qr import make_qr_data_url

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_qr_data_url_is_png():
    data_url = make_qr_data_url("lnbc1500n1pj9testinvoice")

    prefix = "data:image/png;base64,"
    assert data_url.startswith(prefix)
    assert base64.b64decode(data_url[len(prefix):]).startswith(PNG_SIGNATURE)
