import functools
import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

import httpx

from aethokit import cli
from aethokit.client import Aethokit


def _relay(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("get-gas-address"):
        return httpx.Response(200, json={"address": "0xABC"})
    return httpx.Response(400, json={"code": "INVALID_TX", "message": "bad payload"})


class CliTests(unittest.TestCase):
    def run_cli(self, argv):
        stub = functools.partial(Aethokit, transport=httpx.MockTransport(_relay))
        out = io.StringIO()
        with mock.patch.object(cli, "Aethokit", stub), mock.patch.dict("os.environ", {}, clear=True):
            with redirect_stdout(out):
                code = cli.main(argv)
        return code, out.getvalue()

    def test_gas_address_prints_address(self) -> None:
        code, out = self.run_cli(["--gas-key", "k", "gas-address"])

        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "0xABC")

    def test_missing_gas_key_is_config_error(self) -> None:
        code, _ = self.run_cli(["gas-address"])
        self.assertEqual(code, 2)

    def test_unknown_network_is_config_error(self) -> None:
        code, _ = self.run_cli(["--gas-key", "k", "--network", "nowhere", "gas-address"])
        self.assertEqual(code, 2)

    def test_networks_file_must_be_a_mapping(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "networks.yaml"
            path.write_text("- devnet\n", encoding="utf-8")
            code, _ = self.run_cli(["--gas-key", "k", "--networks-file", str(path), "gas-address"])
        self.assertEqual(code, 2)

    def test_padded_gas_key_is_config_error(self) -> None:
        code, _ = self.run_cli(["--gas-key", " k ", "gas-address"])
        self.assertEqual(code, 2)

    def test_relay_error_exit_code(self) -> None:
        code, _ = self.run_cli(["--gas-key", "k", "sponsor", "AQID"])
        self.assertEqual(code, 1)

    def test_empty_tx_is_api_error(self) -> None:
        code, _ = self.run_cli(["--gas-key", "k", "sponsor", ""])
        self.assertEqual(code, 1)

    def test_parser_requires_command(self) -> None:
        with self.assertRaises(SystemExit), redirect_stdout(io.StringIO()), mock.patch("sys.stderr", io.StringIO()):
            cli.build_parser().parse_args(["--gas-key", "k"])


class NewLoggerTests(unittest.TestCase):
    def test_handler_installed_once(self) -> None:
        from aethokit.log import new_logger

        first = new_logger()
        second = new_logger()

        self.assertIs(first, second)
        tagged = [h for h in second.handlers if getattr(h, "_aethokit", False)]
        self.assertEqual(len(tagged), 1)


if __name__ == "__main__":
    unittest.main()
