"""Tests for the in-process testing helpers."""

import pytest

from concourse_resource.testing import StepResult, create_env_vars, run_step
from tests.helpers.resources import BuildAwareResource, FailingResource, RecordingResource


class TestCreateEnvVars:
    """Tests for create_env_vars."""

    def test_job_build(self):
        """Test a job build environment has every variable."""
        env = create_env_vars()

        assert env["BUILD_ID"] == "12345678"
        assert env["BUILD_TEAM_NAME"] == "my-team"
        assert env["ATC_EXTERNAL_URL"] == "https://ci.example.com"
        assert env["BUILD_NAME"] == "42"
        assert env["BUILD_JOB_NAME"] == "my-job"
        assert env["BUILD_PIPELINE_NAME"] == "my-pipeline"
        assert "BUILD_PIPELINE_INSTANCE_VARS" not in env

    def test_one_off_build(self):
        """Test a one-off build environment has no job variables."""
        env = create_env_vars(one_off_build=True)

        assert set(env) == {"BUILD_ID", "BUILD_TEAM_NAME", "ATC_EXTERNAL_URL"}

    def test_instance_vars_are_json(self):
        """Test instance vars are encoded as compact JSON."""
        env = create_env_vars(instance_vars={"branch": "dev", "shard": 1})
        assert env["BUILD_PIPELINE_INSTANCE_VARS"] == '{"branch":"dev","shard":1}'

    def test_overrides(self):
        """Test keyword arguments override the defaults."""
        env = create_env_vars(BUILD_ID="7", EXTRA="yes")

        assert env["BUILD_ID"] == "7"
        assert env["EXTRA"] == "yes"


class TestRunStep:
    """Tests for run_step."""

    def test_check(self):
        """Test run_step runs check and captures its output."""
        result = run_step(RecordingResource, "check", {"source": {"uri": "git://repo"}})

        assert isinstance(result, StepResult)
        assert result.succeeded
        assert result.json() == [{"ref": "abc123"}]
        assert result.stderr == ""

    def test_in_with_path(self, tmp_path):
        """Test run_step passes the directory to in."""
        result = run_step(RecordingResource(), "in", {"version": {"ref": "v2"}}, path=str(tmp_path))

        assert result.exit_code == 0
        assert result.json() == {"version": {"ref": "v2"}, "metadata": None}
        assert (tmp_path / "ref").read_text() == "v2"

    def test_raw_request_text(self):
        """Test a raw request string is passed through verbatim."""
        result = run_step(RecordingResource, "check", "")

        assert result.exit_code == 2
        assert result.stdout == ""

    def test_in_without_path(self):
        """Test in without a directory exits 2."""
        result = run_step(RecordingResource, "in", {"version": {"ref": "v2"}})

        assert result.exit_code == 2
        assert "expected path" in result.stderr

    def test_failure(self, tmp_path):
        """Test a failing step is reported in the result."""
        result = run_step(FailingResource, "in", {"version": {"ref": "v2"}}, path=str(tmp_path))

        assert not result.succeeded
        assert result.exit_code == 1
        assert "no such version" in result.stderr

    def test_environment_is_patched(self, tmp_path):
        """Test the given environment is visible to the step."""
        result = run_step(
            BuildAwareResource,
            "in",
            {"version": {"ref": "v2"}},
            path=str(tmp_path),
            env=create_env_vars(BUILD_ID="555"),
        )

        assert result.json()["metadata"][0] == {"name": "build", "value": "555"}

    def test_cleared_environment(self, tmp_path):
        """Test clear_env hides the surrounding environment."""
        env = create_env_vars()
        del env["BUILD_ID"]

        result = run_step(BuildAwareResource, "in", {"version": {"ref": "v2"}}, path=str(tmp_path), env=env, clear_env=True)

        assert result.exit_code == 2
        assert "BUILD_ID" in result.stderr

    def test_invocation_override(self):
        """Test a custom invocation path selects the step."""
        result = run_step(RecordingResource, "check", {}, invocation="/opt/resource/unexpected")

        assert result.exit_code == 2
        assert "unexpected being called as '/opt/resource/unexpected'" in result.stderr

    def test_json_of_empty_stdout_fails(self):
        """Test json() fails on empty stdout."""
        result = StepResult(exit_code=1, stdout="", stderr="boom")
        with pytest.raises(ValueError):
            result.json()
