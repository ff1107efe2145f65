import yaml

from rag_workshop.cli.main import cli


class TestComposeCommand:
    """Tests for compose export."""

    def test_default_output(self, cli_runner, install_path):
        result = cli_runner.invoke(cli, ['--install-path', str(install_path), 'compose'])

        assert result.exit_code == 0
        data = yaml.safe_load((install_path / "docker-compose.yml").read_text())
        assert set(data["services"]) == {"ollama", "chroma", "n8n"}

    def test_qdrant_custom_output(self, cli_runner, install_path, tmp_path):
        output = tmp_path / "out.yml"
        result = cli_runner.invoke(cli, [
            '--install-path', str(install_path), '--vector-store', 'qdrant',
            'compose', '-o', str(output),
        ])

        assert result.exit_code == 0
        data = yaml.safe_load(output.read_text())
        assert data["services"]["qdrant"]["ports"] == ["6333:6333"]

    def test_port_clash_is_fatal(self, cli_runner, install_path):
        result = cli_runner.invoke(cli, [
            '--install-path', str(install_path), '--llm-port', '5678', 'compose',
        ])

        assert result.exit_code == 1
        assert "Fatal: Host port(s) 5678" in result.output
