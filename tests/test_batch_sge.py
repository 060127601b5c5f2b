# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from rj_lib.batch.interface import BatchMeta
from rj_lib.batch.sge import SGE, SGEJob
from rj_lib.core.error import RJError
from rj_lib.properties.states import BatchState

QSTAT_LISTING = """\
job-ID  prior   name       user         state submit/start at     queue                          slots ja-task-ID
-----------------------------------------------------------------------------------------------------------------
 123456 0.55500 jupyter.9h alice        r     10/18/2026 12:00:01 all.q@node7                        1
       Full jobname:     jupyter.9h
 123457 0.00000 jupyter.1h alice        qw    10/18/2026 12:00:05                                    1
       Full jobname:     jupyter.1h
"""

QSTAT_DESCRIPTION = """\
==============================================================
job_number:                 123456
job_name:                   jupyter.9h
stdout_path_list:           NONE:/home/alice/logs
"""


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


def test_sge_registered():
    assert BatchMeta.fromStr("SGE") is SGE
    assert str(SGE) == "SGE"


def test_sge_is_available():
    with patch("rj_lib.batch.sge.sge.shutil.which", return_value="/usr/bin/qsub"):
        assert SGE.isAvailable()

    with patch("rj_lib.batch.sge.sge.shutil.which", return_value=None):
        assert not SGE.isAvailable()


def test_sge_translate_submit():
    assert SGE._translateSubmit(["-N", "jupyter.9h", "-o", "/tmp/log"]) == [
        "qsub",
        "-terse",
        "-N",
        "jupyter.9h",
        "-o",
        "/tmp/log",
    ]


def test_sge_job_submit_passes_script_on_stdin():
    with patch(
        "rj_lib.batch.sge.sge.subprocess.run", return_value=_completed(stdout="123456\n")
    ) as mock_run:
        job_id = SGE.jobSubmit(["-N", "jupyter"], "#!/bin/bash\necho hi\n")

    assert job_id == "123456"
    args, kwargs = mock_run.call_args
    assert args[0] == ["qsub", "-terse", "-N", "jupyter"]
    assert kwargs["input"] == "#!/bin/bash\necho hi\n"


def test_sge_job_submit_strips_array_range():
    with patch(
        "rj_lib.batch.sge.sge.subprocess.run",
        return_value=_completed(stdout="123456.1-10:1\n"),
    ):
        assert SGE.jobSubmit([], "") == "123456"


def test_sge_job_submit_failure():
    with (
        patch(
            "rj_lib.batch.sge.sge.subprocess.run",
            return_value=_completed(returncode=1, stderr="Unable to run job: denied"),
        ),
        pytest.raises(RJError, match="Failed to submit the job: Unable to run job"),
    ):
        SGE.jobSubmit([], "")


def test_sge_job_submit_no_job_id():
    with (
        patch("rj_lib.batch.sge.sge.subprocess.run", return_value=_completed()),
        pytest.raises(RJError, match="did not report a job ID"),
    ):
        SGE.jobSubmit([], "")


def test_sge_get_unfinished_batch_jobs():
    with patch(
        "rj_lib.batch.sge.sge.subprocess.run",
        return_value=_completed(stdout=QSTAT_LISTING),
    ) as mock_run:
        jobs = SGE.getUnfinishedBatchJobs("alice")

    assert mock_run.call_args.kwargs["input"] == "qstat -r -u alice"

    assert len(jobs) == 2
    assert all(isinstance(job, SGEJob) for job in jobs)

    running, queued = jobs
    assert running.getId() == "123456"
    assert running.getName() == "jupyter.9h"
    assert running.getUser() == "alice"
    assert running.getState() == BatchState.RUNNING
    assert running.isRunning()
    assert running.getNode() == "node7"
    assert running.getQueue() == "all.q@node7"

    assert queued.getState() == BatchState.QUEUED
    assert not queued.isRunning()
    assert queued.getNode() is None
    assert queued.getQueue() is None


def test_sge_get_unfinished_batch_jobs_failure():
    with (
        patch(
            "rj_lib.batch.sge.sge.subprocess.run",
            return_value=_completed(returncode=1, stderr="cannot reach qmaster"),
        ),
        pytest.raises(RJError, match="Could not retrieve information about jobs"),
    ):
        SGE.getUnfinishedBatchJobs("alice")


def test_sge_get_output_path():
    with patch(
        "rj_lib.batch.sge.sge.subprocess.run",
        return_value=_completed(stdout=QSTAT_DESCRIPTION),
    ) as mock_run:
        path = SGE.getOutputPath("123456")

    assert mock_run.call_args.kwargs["input"] == "qstat -j 123456"
    assert path == Path("/home/alice/logs")


def test_sge_get_output_path_job_gone():
    with patch(
        "rj_lib.batch.sge.sge.subprocess.run",
        return_value=_completed(returncode=1, stderr="Following jobs do not exist"),
    ):
        assert SGE.getOutputPath("123456") is None


def test_sge_get_output_path_not_recorded():
    with patch(
        "rj_lib.batch.sge.sge.subprocess.run",
        return_value=_completed(stdout="job_number: 123456\n"),
    ):
        assert SGE.getOutputPath("123456") is None


def test_sge_get_default_output_name():
    assert SGE.getDefaultOutputName("jupyter.9h", "123456") == "jupyter.9h.o123456"


def test_sge_read_output_file(tmp_path):
    file = tmp_path / "log"
    assert SGE.readOutputFile(file) is None

    file.write_text("content")
    assert SGE.readOutputFile(file) == "content"


def test_sge_remove_output_file(tmp_path):
    file = tmp_path / "log"
    # missing file is ignored
    SGE.removeOutputFile(file)

    file.write_text("stale")
    SGE.removeOutputFile(file)
    assert not file.exists()


def test_batch_meta_from_str_unknown():
    with pytest.raises(RJError, match="No batch system registered as 'PBS'"):
        BatchMeta.fromStr("PBS")


def test_batch_meta_from_env_var(monkeypatch):
    monkeypatch.setenv("RJ_BATCH_SYSTEM", "VBS")

    assert str(BatchMeta.fromEnvVarOrGuess()) == "VBS"


def test_batch_meta_guess_sge(monkeypatch):
    monkeypatch.delenv("RJ_BATCH_SYSTEM", raising=False)

    with patch("rj_lib.batch.sge.sge.shutil.which", return_value="/usr/bin/qsub"):
        assert BatchMeta.fromEnvVarOrGuess() is SGE


def test_batch_meta_guess_nothing_available(monkeypatch):
    monkeypatch.delenv("RJ_BATCH_SYSTEM", raising=False)

    with (
        patch("rj_lib.batch.sge.sge.shutil.which", return_value=None),
        pytest.raises(RJError, match="Could not guess a batch system"),
    ):
        BatchMeta.fromEnvVarOrGuess()
