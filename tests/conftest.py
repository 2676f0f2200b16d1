# tests/conftest.py
"""
Fixtures compartilhados para testes do Bound Config.

Este módulo define fixtures reutilizáveis que fornecem:
- um diretório de configuração isolado por teste
- um ConfigRegistry apontando para esse diretório
- utilitários para ler e preparar backing files em YAML

Decisões arquiteturais:
    - Todo I/O ocorre sob `tmp_path`; nenhum teste toca o diretório do projeto
    - Backing files são lidos com PyYAML, o mesmo parser usado pela biblioteca
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Cada teste recebe um registry novo (sem estado compartilhado)
    - Nenhuma fixture registra schemas implicitamente

Limites explícitos:
    - Não define schemas (cada módulo de teste declara os seus)
    - Não substitui testes de integração com a aplicação hospedeira
"""

from pathlib import Path
from typing import Any, Callable, Dict

import pytest
import yaml


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """
    Diretório de configuração ainda inexistente, dentro de `tmp_path`.

    O diretório não é criado aqui: o registry deve criá-lo no primeiro uso.
    """
    return tmp_path / "config"


@pytest.fixture
def registry(config_dir: Path):
    """ConfigRegistry novo, apontando para `config_dir` com extensão `.yml`."""
    from bound_config import ConfigRegistry

    return ConfigRegistry(config_dir)


@pytest.fixture
def read_yaml() -> Callable[[Path], Dict[str, Any]]:
    """Lê um backing file YAML do disco (arquivo vazio → dict vazio)."""

    def _read(path: Path) -> Dict[str, Any]:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        return data or {}

    return _read


@pytest.fixture
def write_yaml() -> Callable[[Path, Dict[str, Any]], Path]:
    """Grava um backing file YAML, criando diretórios intermediários."""

    def _write(path: Path, data: Dict[str, Any]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write
