import pytest

from debinfo_lib import SourceError, utils


def test_warn(capsys):
    utils.warn("no control member")
    assert capsys.readouterr().err == "warning: no control member\n"


def test_fatal(capsys):
    called = []
    with pytest.raises(SystemExit) as excinfo:
        utils.fatal(SourceError("cannot open x.deb", "x.deb"),
                    help=lambda: called.append(True))

    assert excinfo.value.code == 1
    assert capsys.readouterr().err == "error: cannot open x.deb\n"
    assert called == [True]
