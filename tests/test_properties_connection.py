# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import pytest

from rj_lib.core.error import RJError
from rj_lib.properties.connection import ConnectionInfo


def test_to_text():
    info = ConnectionInfo("1234", 7777, "node1", "http://node1:7777/lab?token=abc")

    assert info.toText() == (
        "JOB_ID=1234\nPORT=7777\nNODE=node1\nURL=http://node1:7777/lab?token=abc"
    )


def test_from_text_ignores_other_lines():
    text = """
[12:00:00] INFO     Job 'jupyter.9h' submitted.
JOB_ID=1234
PORT=7777
NODE=node1
URL=http://node1:7777/lab?token=abc
"""
    info = ConnectionInfo.fromText(text)

    assert info == ConnectionInfo(
        "1234", 7777, "node1", "http://node1:7777/lab?token=abc"
    )


def test_from_text_uses_last_occurrence():
    text = "NODE=old\nJOB_ID=1\nPORT=1\nURL=http://old:1/\nNODE=new\nURL=http://new:1/\n"
    info = ConnectionInfo.fromText(text)

    assert info.node == "new"
    assert info.url == "http://new:1/"


def test_from_text_missing_node():
    with pytest.raises(RJError, match="Could not find the compute node"):
        ConnectionInfo.fromText("JOB_ID=1\nPORT=7777\nURL=http://x:7777/\n")


def test_from_text_missing_url():
    with pytest.raises(RJError, match="Missing URL"):
        ConnectionInfo.fromText("JOB_ID=1\nPORT=7777\nNODE=node1\n")


def test_from_text_invalid_port():
    with pytest.raises(RJError, match="Invalid port 'abc'"):
        ConnectionInfo.fromText("JOB_ID=1\nPORT=abc\nNODE=node1\nURL=http://x/\n")


def test_get_local_url():
    info = ConnectionInfo("1", 7777, "node1", "http://node1:7777/lab?token=abc")

    assert info.getLocalUrl(9000) == "http://localhost:9000/lab?token=abc"
