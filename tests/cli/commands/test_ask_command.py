from unittest.mock import patch

from rag_workshop.cli.main import cli
from rag_workshop.models.config import WorkshopConfig
from rag_workshop.services.exceptions import WebhookError
from rag_workshop.services.webhook import WebhookAnswer
from rag_workshop.utils.config_manager import ConfigManager

ANSWER = WebhookAnswer.model_validate({
    "question": "What is RAG?",
    "answer": "Retrieval-Augmented Generation.",
    "sources": [{"document": "intro.pdf", "relevance_score": 0.9123}],
})


class TestAskCommand:
    """Tests for ask."""

    def test_no_webhook_configured(self, cli_runner, install_path):
        result = cli_runner.invoke(cli, ['--install-path', str(install_path), 'ask', 'What is RAG?'])

        assert result.exit_code == 1
        assert "No webhook URL configured" in result.output

    @patch('rag_workshop.cli.commands.ask.WebhookClient')
    def test_ask_with_saved_webhook(self, mock_client_class, cli_runner, install_path):
        ConfigManager(install_path).save_config(
            WorkshopConfig(install_path=install_path, webhook_url="http://localhost:5678/webhook/rag")
        )
        mock_client_class.return_value.ask.return_value = ANSWER

        result = cli_runner.invoke(cli, ['--install-path', str(install_path), 'ask', 'What is RAG?'])

        assert result.exit_code == 0, result.output
        mock_client_class.assert_called_once_with("http://localhost:5678/webhook/rag")
        assert "Retrieval-Augmented Generation." in result.output
        assert "intro.pdf" in result.output
        assert "0.912" in result.output

    @patch('rag_workshop.cli.commands.ask.WebhookClient')
    def test_webhook_failure(self, mock_client_class, cli_runner, install_path):
        mock_client_class.return_value.ask.side_effect = WebhookError("Webhook call failed: refused")

        result = cli_runner.invoke(cli, [
            '--install-path', str(install_path), 'ask', 'q', '--webhook-url', 'http://x',
        ])

        assert result.exit_code == 1
        assert "Webhook call failed" in result.output
        assert "Fatal" not in result.output
