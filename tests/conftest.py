import gzip
import io
import lzma
import tarfile
from pathlib import Path
from typing import Callable, Iterable, Optional

import pytest
import zstandard

CONTROL = b"""\
Package: hello
Version: 2.10-3
Architecture: amd64
Maintainer: Santiago Vila <sanvila@debian.org>
Installed-Size: 280
Depends: libc6 (>= 2.34)
Section: devel
Priority: optional
Homepage: https://www.gnu.org/software/hello/
Description: example package based on GNU hello
 The GNU hello program produces a familiar, friendly greeting.
 .
 Seriously though: this is an example.
"""

COMPRESSORS: dict[str, Callable[[bytes], bytes]] = {
    "gz": gzip.compress,
    "xz": lzma.compress,
    "zst": lambda data: zstandard.ZstdCompressor().compress(data),
}


def ar_member(name: str, data: bytes) -> bytes:
    header = (name.encode().ljust(16) +
              b"0".ljust(12) +
              b"0".ljust(6) +
              b"0".ljust(6) +
              b"100644".ljust(8) +
              str(len(data)).encode().ljust(10) +
              b"`\n")
    assert len(header) == 60
    if len(data) % 2:
        data += b"\n"
    return header + data


def ar_archive(members: Iterable[tuple[str, bytes]]) -> bytes:
    return b"!<arch>\n" + b"".join(ar_member(n, d) for n, d in members)


def control_tar(control: Optional[bytes] = CONTROL,
                name: str = "./control",
                others: Iterable[tuple[str, bytes]] = (
                    ("./md5sums", b"d41d8cd98f00b204e9800998ecf8427e  x\n"),
                )) -> bytes:
    entries = list(others)
    if control is not None:
        entries.append((name, control))

    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w") as tar:
        for entry_name, data in entries:
            info = tarfile.TarInfo(entry_name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def deb_members(control: Optional[bytes] = CONTROL,
                compression: str = "gz",
                deb_version: bytes = b"2.0\n") -> list[tuple[str, bytes]]:
    return [
        ("debian-binary", deb_version),
        (f"control.tar.{compression}",
         COMPRESSORS[compression](control_tar(control))),
        (f"data.tar.{compression}",
         COMPRESSORS[compression](control_tar(None, others=()))),
    ]


@pytest.fixture
def make_deb(tmp_path: Path) -> Callable[..., Path]:
    """write an ar archive with the given (name, data) members -> path"""
    counter = iter(range(1000))

    def f(members: Iterable[tuple[str, bytes]]) -> Path:
        path = tmp_path / f"package{next(counter)}.deb"
        path.write_bytes(ar_archive(members))
        return path

    return f
