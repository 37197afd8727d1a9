"""
Unit tests for CLI commands.
"""
import pytest
from typer.testing import CliRunner

from cement_carbon.cli.main import app

runner = CliRunner()


@pytest.fixture
def invoke(tmp_path, sample_dataset):
    """Run the CLI with logs in a temp dir and the sample dataset."""

    def _invoke(*args, dataset=True):
        argv = ["--log-dir", str(tmp_path / "logs"), *args]
        if dataset:
            argv += ["--dataset", str(sample_dataset)]
        return runner.invoke(app, argv)

    return _invoke


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_help_output(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Cement Carbon Analyzer" in result.stdout

    def test_version_output(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert any(char.isdigit() for char in result.stdout)

    def test_unknown_command(self):
        result = runner.invoke(app, ["unknown-command"])
        assert result.exit_code != 0

    def test_log_settings_from_config(self, tmp_path, sample_dataset, monkeypatch):
        logs_dir = tmp_path / "configured-logs"
        monkeypatch.setenv("CEMENT_PATHS__LOGS_DIR", str(logs_dir))
        monkeypatch.setenv("CEMENT_LOGGING__RETENTION_DAYS", "7")

        result = runner.invoke(app, ["companies", "--dataset", str(sample_dataset)])

        assert result.exit_code == 0, result.stdout
        assert (logs_dir / "errors.log").exists()

    def test_invalid_logging_config_rejected(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CEMENT_LOGGING__RETENTION_DAYS", "0")
        result = runner.invoke(app, ["--log-dir", str(tmp_path / "logs"), "config"])
        assert result.exit_code == 1
        assert "Configuration Error" in result.stdout

    def test_missing_config_file_rejected(self, tmp_path):
        result = runner.invoke(app, ["--config", str(tmp_path / "missing.yaml"), "config"])
        assert result.exit_code != 0


class TestAnalyzeCommand:
    """Test the analyze command."""

    def test_analyze_shortfall(self, invoke):
        result = invoke("analyze", "ultratech", "--carbon-price", "9.5")

        assert result.exit_code == 0, result.stdout
        assert "UltraTech Cement Ltd" in result.stdout
        assert "Shortfall" in result.stdout
        assert "-0.62 MMt" in result.stdout
        assert "Investor Metrics" in result.stdout
        assert "Share Price (6M)" in result.stdout
        assert "/brsr/Ultratech.pdf" in result.stdout

    def test_analyze_surplus(self, invoke):
        result = invoke("analyze", "ACC", "-p", "9.5")

        assert result.exit_code == 0, result.stdout
        assert "Surplus" in result.stdout
        assert "+18.69 cr" in result.stdout
        assert "Share Price (6M)" not in result.stdout

    def test_analyze_gap_percent(self, invoke):
        result = invoke("analyze", "acc", "-p", "9.5", "--gap-percent", "50")
        assert result.exit_code == 0, result.stdout
        assert "+9.34 cr" in result.stdout
        assert "+0.12 MMt (" in result.stdout
        assert "% vs target" in result.stdout

    def test_analyze_unknown_company(self, invoke):
        result = invoke("analyze", "nosuch")
        assert result.exit_code == 1
        assert "Company not found" in result.stdout
        assert "ultratech" in result.stdout

    def test_analyze_price_out_of_range(self, invoke):
        result = invoke("analyze", "acc", "--carbon-price", "500")
        assert result.exit_code == 1
        assert "outside the allowed range" in result.stdout

    def test_analyze_missing_dataset(self, invoke, tmp_path):
        result = invoke("analyze", "acc", "--dataset", str(tmp_path / "none.yaml"), dataset=False)
        assert result.exit_code == 1
        assert "Dataset Error" in result.stdout

    def test_analyze_short_history(self, invoke, tmp_path):
        dataset = tmp_path / "short.yaml"
        dataset.write_text(
            """
companies:
  - id: tiny
    name: Tiny Cement
    ticker: TINY
    currentSharePrice: 10
    revenue: 1
    revenueGrowth: 0
    netIncome: 0
    employees: 1
    workers: 1
    foundedYear: 2000
    emissionHistory:
      - {year: 2024, emissions: 1, scope1: 1, scope2: 1, physicalOutput: 1000, intensityPerTonne: 600}
    intensityProjections:
      - {year: 2025, projected: 590, govtTarget: 580}
"""
        )
        result = invoke("analyze", "tiny", "--dataset", str(dataset), dataset=False)
        assert result.exit_code == 1
        assert "Cannot analyze company" in result.stdout


class TestOtherCommands:
    """Test companies, peers, scenario, chat-context and config."""

    def test_companies(self, invoke):
        result = invoke("companies")
        assert result.exit_code == 0, result.stdout
        assert result.stdout.count("Shortfall") == 2
        assert result.stdout.count("Surplus") == 1

    def test_peers(self, invoke):
        result = invoke("peers", "shree")
        assert result.exit_code == 0, result.stdout
        assert "Peer Comparison" in result.stdout
        assert "FY 25-26 Emission Gap vs Targets" in result.stdout

    def test_scenario_defaults(self, invoke):
        result = invoke("scenario", dataset=False)
        assert result.exit_code == 0, result.stdout
        assert "Ramco Industries" in result.stdout
        assert "571.5" in result.stdout

    def test_scenario_zero_intensity(self, invoke):
        result = invoke("scenario", "--intensity", "0", "615", "578", dataset=False)
        assert result.exit_code == 0, result.stdout
        assert "inf%" in result.stdout

    def test_scenario_missing_name(self, invoke):
        result = invoke("scenario", "--name", " ", dataset=False)
        assert result.exit_code == 1
        assert "Company Name" in result.stdout

    def test_chat_context(self, invoke):
        result = invoke("chat-context", "Shree carbon exposure?", "-p", "30")
        assert result.exit_code == 0, result.stdout
        assert "Matched companies: Shree Cement Ltd" in result.stdout
        assert "Current carbon price: 30.0 USD/tCO2e." in result.stdout
        assert '"companies_raw"' in result.stdout
        assert "- UltraTech Cement Ltd (ULTRACEMCO)" in result.stdout
        assert "- ACC Limited (ACC)" in result.stdout

    def test_chat_context_oversized_dataset(self, invoke, monkeypatch):
        monkeypatch.setenv("CEMENT_CHAT__MAX_DATA_CHARS", "1500")
        monkeypatch.setenv("CEMENT_CHAT__MAX_PLANTS_PER_COMPANY", "1")

        result = invoke("chat-context", "Shree carbon exposure?")

        assert result.exit_code == 0, result.stdout
        assert "...truncated..." not in result.stdout
        assert '"companies_raw"' not in result.stdout
        assert '"name": "Beawar"' in result.stdout
        assert '"name": "Ras"' not in result.stdout
        assert '"name": "Wadi"' not in result.stdout
        assert "- ACC Limited (ACC)" in result.stdout

    def test_config(self, invoke):
        result = invoke("config", dataset=False)
        assert result.exit_code == 0, result.stdout
        assert "Analysis Configuration" in result.stdout
        assert "9.5 USD/tCO2e" in result.stdout
