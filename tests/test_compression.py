import io

import pytest

from debinfo_lib import codec_for
from debinfo_lib.compression import CODECS, GZIP, XZ, ZSTD

from conftest import COMPRESSORS


@pytest.mark.parametrize("name, codec", [
    ("control.tar.gz", GZIP),
    ("control.tar.xz", XZ),
    ("control.tar.zst", ZSTD),
    ("data.tar.zst", ZSTD),
    ("control.tar.bz2", None),
    ("control.tar", None),
    ("debian-binary", None),
])
def test_codec_for(name, codec):
    assert codec_for(name) is codec


@pytest.mark.parametrize("codec", CODECS, ids=lambda c: c.name)
def test_wrap_decompresses_lazily(codec):
    data = b"control data\n" * 1000
    fileobj = io.BytesIO(COMPRESSORS[codec.suffix[1:]](data))

    with codec.wrap(fileobj) as stream:
        assert stream.read(8) == b"control "
        assert stream.read() == data[8:]

    # closing the decompressor leaves the member stream open
    assert not fileobj.closed


@pytest.mark.parametrize("codec", CODECS, ids=lambda c: c.name)
def test_wrap_rejects_garbage(codec):
    with pytest.raises(codec.errors):
        with codec.wrap(io.BytesIO(b"this is not compressed " * 4)) as stream:
            stream.read()
