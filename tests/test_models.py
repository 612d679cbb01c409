# tests/test_models.py
"""Tests for result serialization."""

import json

from seo_analyzer.models import AnalysisResult, to_dict


class TestAnalysisResultSerialization:
    """Test suite for AnalysisResult.to_dict / from_dict."""

    def test_camel_case_keys(self, sample_result):
        data = sample_result.to_dict()

        assert data["overallScore"] == sample_result.overall_score
        assert data["metaTags"]["titleLength"] == 5
        assert data["metaTags"]["htmlLang"] == "en"
        assert data["performance"]["loadTimeMs"] == 420
        assert data["links"]["externalLinks"][0] == {
            "url": "https://other.com/",
            "text": "Other",
            "nofollow": False,
            "status": 200,
            "verified": False,
        }
        assert data["ampComparison"]["differences"][0]["ampValue"] == "200ms"
        assert data["robotsTxt"] == {"found": False, "content": None, "rules": []}

    def test_payloads_are_not_renamed(self, sample_result):
        data = sample_result.to_dict()

        assert data["schema"]["types"][0]["data"] == {"@type": "Article", "headline": "Story"}

    def test_json_round_trip(self, sample_result):
        text = sample_result.to_json()

        assert json.loads(text)["url"] == "https://example.com/story"
        assert AnalysisResult.from_json(text) == sample_result

    def test_unknown_keys_are_ignored(self, sample_result):
        data = sample_result.to_dict()
        data["legacyField"] = True
        data["metaTags"]["somethingNew"] = 1

        assert AnalysisResult.from_dict(data) == sample_result

    def test_missing_comparison(self, sample_result):
        sample_result.amp_comparison = None

        data = to_dict(sample_result)

        assert data["ampComparison"] is None
        assert AnalysisResult.from_dict(data).amp_comparison is None
