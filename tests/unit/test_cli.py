"""
CLI Tests

Drives airdrop_cli.main.main() end to end in a temporary directory:
generate -> verify, sign, domain and config.
"""
import json

import pytest

from airdrop_cli.main import main, EXIT_SUCCESS, EXIT_RUNTIME_ERROR, EXIT_VERIFICATION_FAILED
from core.crypto.typed_data import EIP712Domain
from core.crypto.vouchers import VoucherVerifier
from core.schemas.allocation import ClaimVoucher
from core.crypto.signatures import Signature

from fixtures.common import ALICE, ALICE_KEY, BOB, CAROL, NFT, ONE_TOKEN, TOKEN, VERIFYING_CONTRACT


CSV_TEXT = (
    "claimant,tokenContract,tokenId,amount\n"
    f"{ALICE},{TOKEN},0,{100 * ONE_TOKEN}\n"
    f"{BOB},{NFT},42,0\n"
    f"not-an-address,{TOKEN},0,5\n"
    f"{CAROL},{TOKEN},0,{50 * ONE_TOKEN}\n"
)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "allocations.csv").write_text(CSV_TEXT)
    return tmp_path


class TestGenerateAndVerify:
    """generate writes a distribution that verify accepts."""

    def test_generate_json_summary(self, workdir, capsys):
        code = main(["generate", "allocations.csv", "--out", "out/dist.json", "--json"])
        assert code == EXIT_SUCCESS

        captured = capsys.readouterr()
        summary = json.loads(captured.out)
        assert summary["claims"] == 3
        assert summary["rejected"] == 1
        assert "Found 1 invalid row(s):" in captured.err

        data = json.loads((workdir / "out" / "dist.json").read_text())
        assert data["merkleRoot"] == summary["merkleRoot"]
        assert len(data["claims"]) == 3

    def test_generate_default_output(self, workdir, capsys):
        assert main(["generate", "allocations.csv"]) == EXIT_SUCCESS
        assert (workdir / "dist" / "airdrop-data.json").exists()
        assert "claims: 3" in capsys.readouterr().out

    def test_generate_missing_csv(self, workdir):
        assert main(["generate", "missing.csv"]) == EXIT_RUNTIME_ERROR

    def test_generate_all_rows_invalid(self, workdir, capsys):
        (workdir / "bad.csv").write_text("claimant,tokenContract,tokenId,amount\nxyz,abc,0,1\n")
        assert main(["generate", "bad.csv"]) == EXIT_RUNTIME_ERROR
        assert "No valid allocations found" in capsys.readouterr().err

    def test_verify_valid(self, workdir, capsys):
        main(["generate", "allocations.csv"])
        capsys.readouterr()

        code = main(["verify", BOB.lower(), "--json"])
        assert code == EXIT_SUCCESS
        report = json.loads(capsys.readouterr().out)
        assert report["valid"] is True
        assert report["claimant"] == BOB
        assert report["index"] == 1

    def test_verify_tampered(self, workdir, capsys):
        main(["generate", "allocations.csv"])
        path = workdir / "dist" / "airdrop-data.json"
        data = json.loads(path.read_text())
        data["claims"][ALICE]["amount"] = str(1_000 * ONE_TOKEN)
        path.write_text(json.dumps(data))
        capsys.readouterr()

        assert main(["verify", ALICE]) == EXIT_VERIFICATION_FAILED
        assert "valid: false" in capsys.readouterr().out

    def test_verify_unknown_claimant(self, workdir):
        main(["generate", "allocations.csv"])
        unknown = "0x" + "ab" * 20
        assert main(["verify", unknown]) == EXIT_RUNTIME_ERROR

    def test_verify_missing_distribution(self, workdir):
        assert main(["verify", ALICE, "-d", "nope.json"]) == EXIT_RUNTIME_ERROR


class TestSign:
    """sign prints a voucher the verifier accepts."""

    def test_sign_with_key(self, workdir, capsys):
        code = main([
            "sign",
            "--token-contract", TOKEN,
            "--amount", "100",
            "--nonce", "0",
            "--key", ALICE_KEY,
            "--verifying-contract", VERIFYING_CONTRACT,
        ])
        assert code == EXIT_SUCCESS

        payload = json.loads(capsys.readouterr().out)
        assert payload["voucher"]["claimant"] == ALICE
        assert payload["voucher"]["amount"] == "100"

        domain = EIP712Domain(chain_id=31337, verifying_contract=VERIFYING_CONTRACT)
        verifier = VoucherVerifier(domain.separator())
        voucher = ClaimVoucher.model_validate(payload["voucher"])
        assert verifier.verify(voucher, Signature.from_hex(payload["signature"])) == ALICE

    def test_sign_key_from_env(self, workdir, monkeypatch, capsys):
        monkeypatch.setenv("AIRDROP_SIGNER_KEY", ALICE_KEY)
        assert main(["sign", "--token-contract", TOKEN, "--nonce", "3"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["voucher"]["nonce"] == "3"

    def test_sign_without_key(self, workdir, capsys):
        assert main(["sign", "--token-contract", TOKEN, "--nonce", "0"]) == EXIT_RUNTIME_ERROR
        assert "No signing key" in capsys.readouterr().err

    def test_sign_bad_contract(self, workdir):
        code = main(["sign", "--token-contract", "0x12", "--nonce", "0", "--key", ALICE_KEY])
        assert code == EXIT_RUNTIME_ERROR


class TestDomainAndConfig:
    """domain and config subcommands."""

    def test_domain(self, workdir, capsys):
        assert main(["domain", "--chain-id", "1", "--verifying-contract", VERIFYING_CONTRACT]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["chainId"] == 1
        assert data["name"] == "SignatureAirdrop"
        expected = EIP712Domain(chain_id=1, verifying_contract=VERIFYING_CONTRACT).separator()
        assert data["separator"] == "0x" + expected.hex()

    def test_config_init_and_show(self, workdir, capsys):
        assert main(["config", "--init"]) == EXIT_SUCCESS
        assert (workdir / "airdrop.json").exists()
        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR

        capsys.readouterr()
        assert main(["config", "--show"]) == EXIT_SUCCESS
        shown = json.loads(capsys.readouterr().out)
        assert shown["domain"]["chain_id"] == 31337
        assert shown["signer"] == {"configured": False}

    def test_no_command(self, workdir):
        assert main([]) == EXIT_RUNTIME_ERROR
