import logging
import subprocess
from pathlib import Path

import jsii
from aws_cdk import BundlingOptions, ILocalBundling
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

logger = logging.getLogger(__name__)

LAMBDA_RUNTIME = _lambda.Runtime.PYTHON_3_14
LAMBDA_PYTHON_VERSION = "3.14"


@jsii.implements(ILocalBundling)
class PythonLocalBundling:
    """ローカル環境でレイヤーの依存パッケージをインストールするBundlingクラス

    pydantic-core などのネイティブ拡張を含むため、
    実行環境に関係なく Lambda (x86_64 / manylinux) 向けの wheel を取得する。
    """

    def __init__(self, source_path: str) -> None:
        self.source_path = source_path

    def try_bundle(self, output_dir: str, options: BundlingOptions) -> bool:
        """ローカルでバンドリングを試行する。

        Args:
            output_dir: 出力先ディレクトリ
            options: BundlingOptions（未使用だが必須）

        Returns:
            True: バンドリング成功（Dockerをスキップ）
            False: バンドリング失敗（Dockerにフォールバック）
        """
        del options  # unused
        requirements_path = Path(self.source_path) / "requirements.txt"
        target_dir = Path(output_dir) / "python"

        if not requirements_path.exists():
            logger.warning("requirements.txt not found: %s", requirements_path)
            return False

        # uvを優先し、なければpipを使用
        if self._try_install(self._uv_command(requirements_path, target_dir)):
            return True

        if self._try_install(self._pip_command(requirements_path, target_dir)):
            return True

        logger.warning("Local bundling failed, falling back to Docker")
        return False

    def _uv_command(self, requirements_path: Path, target_dir: Path) -> list[str]:
        return [
            "uv",
            "pip",
            "install",
            "-r",
            str(requirements_path),
            "--target",
            str(target_dir),
            "--python-platform",
            "x86_64-manylinux2014",
            "--python-version",
            LAMBDA_PYTHON_VERSION,
            "--only-binary",
            ":all:",
            "--quiet",
        ]

    def _pip_command(self, requirements_path: Path, target_dir: Path) -> list[str]:
        return [
            "pip",
            "install",
            "-r",
            str(requirements_path),
            "-t",
            str(target_dir),
            "--platform",
            "manylinux2014_x86_64",
            "--python-version",
            LAMBDA_PYTHON_VERSION,
            "--implementation",
            "cp",
            "--only-binary=:all:",
            "--quiet",
        ]

    def _try_install(self, command: list[str]) -> bool:
        """インストールコマンドを実行する。"""
        tool = command[0]
        try:
            logger.info("Trying local bundling with %s...", tool)
            subprocess.run(command, check=True)
            logger.info("Local bundling with %s succeeded", tool)
            return True
        except FileNotFoundError:
            logger.debug("%s not found", tool)
            return False
        except subprocess.CalledProcessError as e:
            logger.debug("%s install failed: %s", tool, e)
            return False


class Layers(Construct):
    """Lambda Layers Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        layer_source_path: str = "layers/common_layer",
    ) -> None:
        super().__init__(scope, id)

        # NOTE: self.common_layerに格納することで、
        # 他のConstructやStackから参照可能にしている
        self.common_layer = _lambda.LayerVersion(
            self,
            "CommonLayer",
            code=_lambda.Code.from_asset(
                layer_source_path,
                bundling=BundlingOptions(
                    image=LAMBDA_RUNTIME.bundling_image,
                    command=[
                        "bash",
                        "-c",
                        "pip install -r requirements.txt -t /asset-output/python",
                    ],
                    local=PythonLocalBundling(layer_source_path),
                ),
            ),
            compatible_runtimes=[LAMBDA_RUNTIME],
            description="Powertools and pydantic for the booking service",
        )
