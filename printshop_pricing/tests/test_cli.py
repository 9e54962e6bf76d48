"""
Tests: Command-line entry point.

Run with:
    pytest printshop_pricing/tests/test_cli.py -v
"""

import json

from printshop_pricing.main import main, preview


class TestPreviewCommand:
    def test_preview_scaffolds_unconfigured_service(self, tmp_path):
        path = tmp_path / "service.json"
        path.write_text(json.dumps({
            "data": {
                "id": "svc-1",
                "supportsPrintCut": True,
                "subCategory": {"name": "Bond Paper A-Series"},
            }
        }), encoding="utf-8")

        result = preview(str(path))

        assert [t["id"] for t in result["pricingConfig"]["baseConfigurations"]] == [
            "a6", "a5", "a4", "a3", "custom",
        ]
        assert result["validation"]["valid"] is True
        assert result["preview"]["options"][-1]["name"] == "Print & Cut"

    def test_preview_keeps_stored_config(self, tmp_path):
        path = tmp_path / "service.json"
        path.write_text(json.dumps({
            "id": "svc-2",
            "pricingConfig": {
                "baseConfigurations": [{"id": "std", "name": "Standard", "unitPrice": 2}],
                "options": [{"id": "bw", "name": "B&W", "enabled": True, "default": False}],
            },
        }), encoding="utf-8")

        result = preview(str(path))

        assert result["pricingConfig"]["baseConfigurations"][0]["id"] == "std"
        assert result["validation"]["reasons"] == ["At least one option must be set as default"]

    def test_main_dispatches_preview(self, tmp_path):
        path = tmp_path / "service.json"
        path.write_text(json.dumps({"id": "svc-3"}), encoding="utf-8")
        assert main(["preview", str(path)]) == 0


class TestUsage:
    def test_no_arguments_prints_usage(self, capsys):
        assert main([]) == 2
        assert "preview" in capsys.readouterr().out
