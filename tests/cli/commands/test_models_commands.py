from unittest.mock import patch

from rag_workshop.cli.main import cli


class TestModelsCommands:
    """Tests for models pull and models list."""

    def test_pull_defaults(self, cli_runner, install_path, workshop_env):
        cli_runner.invoke(cli, ['--install-path', str(install_path), 'start', 'ollama', '--no-wait'])

        result = cli_runner.invoke(cli, ['--install-path', str(install_path), 'models', 'pull'])

        assert result.exit_code == 0, result.output
        assert "Pulled llama3.2:3b" in result.output
        assert "All models pulled" in result.output

    def test_pull_without_container_reports_failure(self, cli_runner, install_path, workshop_env):
        with patch('rag_workshop.core.model_fetcher.time.sleep') as mock_sleep:
            result = cli_runner.invoke(cli, ['--install-path', str(install_path), 'models', 'pull', 'phi3'])

        assert result.exit_code == 0
        assert "Could not pull phi3 after 2 attempts" in result.output
        mock_sleep.assert_called_once_with(5)

    @patch('rag_workshop.core.model_fetcher.ModelFetcher.list_models')
    def test_list(self, mock_list, cli_runner, install_path, workshop_env):
        mock_list.return_value = ["llama3.2:3b"]

        result = cli_runner.invoke(cli, ['--install-path', str(install_path), 'models', 'list'])

        assert result.exit_code == 0
        assert "llama3.2:3b" in result.output
        assert "Missing workshop models: nomic-embed-text" in result.output

    @patch('rag_workshop.core.model_fetcher.ModelFetcher.list_models')
    def test_list_empty(self, mock_list, cli_runner, install_path, workshop_env):
        mock_list.return_value = []

        result = cli_runner.invoke(cli, ['--install-path', str(install_path), 'models', 'list'])

        assert "No models installed" in result.output
