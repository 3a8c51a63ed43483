"""
base64url 编解码单元测试

覆盖无填充编码、严格字母表校验以及规范形式 (canonical) 校验。
"""

from __future__ import annotations

import base64

import pytest

from tessera.tokens import base64url
from tessera.tokens.exceptions import MalformedEncodingError


class TestEncode:
    """编码测试"""

    def test_empty_bytes_encode_to_empty_text(self) -> None:
        assert base64url.encode(b"") == ""

    def test_padding_is_omitted(self) -> None:
        assert base64url.encode(b"a") == "YQ"
        assert base64url.encode(b"ab") == "YWI"
        assert base64url.encode(b"abc") == "YWJj"

    def test_url_safe_alphabet(self) -> None:
        """'+' and '/' are replaced by '-' and '_'"""
        assert base64.b64encode(b"\xfb\xff") == b"+/8="
        assert base64url.encode(b"\xfb\xff") == "-_8"


class TestDecode:
    """解码测试"""

    @pytest.mark.parametrize("raw", [b"", b"a", b"ab", b"abc", bytes(range(256))])
    def test_decodes_encoded_bytes(self, raw: bytes) -> None:
        assert base64url.decode(base64url.encode(raw)) == raw

    def test_decodes_url_safe_characters(self) -> None:
        assert base64url.decode("-_8") == b"\xfb\xff"

    @pytest.mark.parametrize(
        "text",
        [
            "YQ==",  # padding is never accepted
            "YQ=",
            "+/8",  # standard alphabet
            "YW Jj",
            "YWJj\n",
            "ÿÿÿÿ",
            "YW.j",
        ],
    )
    def test_rejects_characters_outside_alphabet(self, text: str) -> None:
        with pytest.raises(MalformedEncodingError) as exc_info:
            base64url.decode(text)
        assert exc_info.value.code == "MALFORMED_ENCODING"

    @pytest.mark.parametrize("text", ["Y", "YWJjZ"])
    def test_rejects_impossible_length(self, text: str) -> None:
        with pytest.raises(MalformedEncodingError, match="invalid length"):
            base64url.decode(text)

    def test_rejects_non_canonical_trailing_bits(self) -> None:
        """'YR' carries the same byte as 'YQ' plus non-zero padding bits"""
        assert base64.urlsafe_b64decode("YR==") == b"a"
        with pytest.raises(MalformedEncodingError, match="non-canonical"):
            base64url.decode("YR")

    def test_rejects_non_text_input(self) -> None:
        with pytest.raises(MalformedEncodingError):
            base64url.decode(b"YQ")  # type: ignore[arg-type]
