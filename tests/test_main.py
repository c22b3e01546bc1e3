"""Unit tests for the main entry point.

Tests the main() function including:
- --text cleaning of a bare description
- Single records, record lists and search responses on stdin or from a file
- Listing vs detail mode and job cards
- Configuration and log level priority (CLI > env > config)
- Exit code handling for configuration and input errors
"""

import io
import json

import pytest

from jobclean.main import InputError, main, process_payload, read_records
from jobclean.normalization import JobNormalizer, NormalizationMode

LONG_DESCRIPTION = (
    "<p>We are looking for a <b>Senior</b> engineer to build our data platform.</p>"
    "<p>Benefits:</p>• Health insurance<br>• Remote work"
)


def _record(job_id, description=LONG_DESCRIPTION, **overrides):
    record = {
        "job_id": job_id,
        "title": "Data Engineer",
        "company": "Acme",
        "description": description,
        "posted_date": "2025-11-01",
        "source": "indeed",
    }
    record.update(overrides)
    return record


@pytest.fixture(autouse=True)
def isolated_run(monkeypatch, tmp_path):
    """Run without config files, override variables or logging side effects."""
    for name in ("ENVIRONMENT", "LOG_LEVEL", "LOG_FORMAT", "PREVIEW_MAX_LENGTH", "CLEANER_CACHE_SIZE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("jobclean.main.load_dotenv", lambda: False)

    calls = []
    monkeypatch.setattr("jobclean.main.configure_logging", lambda **kwargs: calls.append(kwargs))
    return calls


def run(argv, stdin_text=""):
    """Run main() and return (exit_code, parsed stdout or None)."""
    stdout = io.StringIO()
    code = main(argv, stdin=io.StringIO(stdin_text), stdout=stdout)
    output = stdout.getvalue()
    return code, json.loads(output) if output else None


class TestMainText:
    """Test --text mode."""

    def test_clean_text(self):
        """Test a bare description is cleaned with salary and preview."""
        code, output = run(["--text", "Job Description&nbsp;Pay is $40 per hour. ----- Benefits: Dental."])

        assert code == 0
        assert output["description"].startswith("Pay is $40 per hour.")
        assert "## Benefits" in output["description"]
        assert output["salary"] == {"min": 76800, "max": 76800, "currency": "USD", "period": "yearly"}
        assert "##" not in output["preview"]

    def test_clean_empty_text(self):
        """Test empty text gives an empty description and no salary."""
        code, output = run(["--text", ""])

        assert code == 0
        assert output == {"description": "", "salary": None, "preview": ""}


class TestMainRecords:
    """Test record input from stdin and files."""

    def test_single_record_from_stdin(self):
        """Test a single JSON record is normalized."""
        code, output = run([], json.dumps(_record("li-1", location="  ")))

        assert code == 0
        job = output["job"]
        assert job["id"] == "li-1"
        assert job["location"] == "Not specified"
        assert job["posted_date"] == "2025-11-01T00:00:00Z"
        assert "## Benefits" in job["description"]
        assert "preview" not in job

    def test_list_of_records(self):
        """Test a list is processed as a listing batch."""
        records = [_record("a-1"), _record("a-2", description="short"), {"job_id": "bad"}]
        code, output = run(["-"], json.dumps(records))

        assert code == 0
        assert [job["id"] for job in output["jobs"]] == ["a-1"]
        assert output["filtered_out"] == 1
        assert output["failed"] == ["bad"]
        assert output["total"] == 1

    def test_search_response_with_total(self):
        """Test the upstream total is scaled by the share of kept jobs."""
        payload = {
            "jobs": [_record("a-1"), _record("a-2", description=None)],
            "total_count": 200,
        }
        code, output = run([], json.dumps(payload))

        assert code == 0
        assert [job["id"] for job in output["jobs"]] == ["a-1"]
        assert output["total"] == 100

    def test_detail_mode_keeps_short_descriptions(self):
        """Test detail mode does not filter and keeps detail fields."""
        records = [_record("d-1", description="short", job_type="Contract")]
        code, output = run(["--mode", "detail"], json.dumps(records))

        assert code == 0
        assert output["jobs"][0]["description"] == "short"
        assert output["jobs"][0]["job_type"] == "Contract"

    def test_cards(self):
        """Test --cards adds a preview to each job."""
        code, output = run(["--cards"], json.dumps([_record("a-1")]))

        assert code == 0
        assert output["jobs"][0]["preview"].startswith("We are looking for a Senior engineer")

    def test_input_file(self, tmp_path):
        """Test records can be read from a file."""
        input_file = tmp_path / "jobs.json"
        input_file.write_text(json.dumps([_record("f-1")]))

        code, output = run([str(input_file)])

        assert code == 0
        assert output["jobs"][0]["id"] == "f-1"


class TestMainErrors:
    """Test exit codes for bad input and configuration."""

    def test_invalid_json(self, capsys):
        """Test invalid JSON exits with 1."""
        code, output = run([], "{not json")

        assert code == 1
        assert output is None
        assert "Input Error" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path, capsys):
        """Test an unreadable input file exits with 1."""
        code, _ = run([str(tmp_path / "missing.json")])

        assert code == 1
        assert "Cannot read input" in capsys.readouterr().err

    def test_invalid_single_record(self, capsys):
        """Test a single invalid record exits with 1."""
        code, _ = run([], json.dumps({"job_id": "li-1"}))

        assert code == 1
        assert "Invalid job record" in capsys.readouterr().err

    def test_unsupported_payload(self):
        """Test a JSON scalar is rejected."""
        code, _ = run([], "42")
        assert code == 1

    def test_missing_config_file(self, tmp_path, capsys):
        """Test a missing --config file exits with 1."""
        code, _ = run(["--config", str(tmp_path / "nope.yaml"), "--text", "x"])

        assert code == 1
        assert "Configuration Error" in capsys.readouterr().err


class TestMainConfig:
    """Test configuration handling."""

    def test_check_config_valid(self, tmp_path, capsys):
        """Test --check-config with a valid file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("preview:\n  max_length: 100\n")

        assert main(["--check-config", "--config", str(config_file)]) == 0
        assert "is valid" in capsys.readouterr().out

    def test_check_config_invalid(self, tmp_path):
        """Test --check-config with an invalid file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("preview:\n  max_length: 1\n")

        assert main(["--check-config", "--config", str(config_file)]) == 1

    def test_log_level_priority(self, tmp_path, monkeypatch, isolated_run):
        """Test CLI log level beats environment, environment beats config."""
        (tmp_path / "config.yaml").write_text("logging:\n  level: ERROR\n  format: json\n")

        run(["--text", "x"])
        assert isolated_run[-1]["level"] == "ERROR"
        assert isolated_run[-1]["format_type"] == "json"

        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        run(["--text", "x"])
        assert isolated_run[-1]["level"] == "WARNING"

        run(["--text", "x", "--log-level", "DEBUG"])
        assert isolated_run[-1]["level"] == "DEBUG"

    def test_preview_length_from_config(self, tmp_path):
        """Test the configured preview length is used for cards."""
        (tmp_path / "config.yaml").write_text("preview:\n  max_length: 20\n")

        code, output = run(["--cards"], json.dumps([_record("a-1")]))

        assert code == 0
        assert len(output["jobs"][0]["preview"]) <= 23


class TestHelpers:
    """Test read_records and process_payload directly."""

    def test_read_records_stdin(self):
        """Test JSON is read from the given stdin stream."""
        assert read_records("-", io.StringIO("[1, 2]")) == [1, 2]

    def test_process_payload_rejects_scalars(self):
        """Test unsupported payload shapes raise InputError."""
        with pytest.raises(InputError):
            process_payload(JobNormalizer(), "text", NormalizationMode.LISTING, cards=False)
