import time

import pytest
from pydantic import ValidationError

from app.features.seo_audit.schemas.analysis import CATEGORY_KEYS
from app.features.seo_audit.services.audit_engine import analyze_document, coerce_text
from app.features.seo_audit.services.page_info import (
    NO_DESCRIPTION,
    NO_TITLE,
    estimate_load_time,
    extract_page_info,
)
from app.features.seo_audit.services.sample_document import SAMPLE_MARKUP, SAMPLE_URL, sample_document
from app.features.seo_audit.services.utils.grading import calculate_grade

TITLE_55 = "Handcrafted Oak Furniture for Modern Homes | Woodworks!"
H1_40 = "Handcrafted oak furniture built to last."


def minimal_valid_page(word_count=320):
    words = " ".join(f"word{i}" for i in range(word_count))
    return (
        '<!DOCTYPE html><html lang="en"><head><meta charset="UTF-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
        f"<title>{TITLE_55}</title></head><body><h1>{H1_40}</h1><p>{words}</p></body></html>"
    )


def assert_invariants(result):
    assert 0 <= result.overall_score <= 100
    assert (result.grade, result.grade_color) == calculate_grade(result.overall_score)
    issues = [issue for _, issue in result.all_issues()]
    assert result.summary.total == len(issues)
    assert result.summary.critical == sum(1 for issue in issues if issue.severity == "critical")
    for key, category in result.categories.items():
        assert 0 <= category.score <= category.max_score, key
        assert category.score == sum(issue.points for issue in category.issues)
        assert category.max_score == sum(issue.max_points for issue in category.issues)
        assert category.issues, key


class TestScenarios:
    def test_minimal_valid_page(self):
        assert len(TITLE_55) == 55
        assert len(H1_40) == 40

        result = analyze_document(minimal_valid_page(), "https://example.com/page")
        categories = result.categories

        assert categories.meta.issue("meta-4").points == 20
        assert categories.meta.issue("meta-18").points == 10
        assert categories.headings.issue("heading-5").points == 30
        assert categories.technical.issue("tech-8").points == 20

        # 300-499 words is the "could be longer" tier
        word_rule = categories.content.issues[0]
        assert word_rule.id == "content-2"
        assert word_rule.severity == "warning"
        assert (word_rule.points, word_rule.max_points) == (15, 25)
        assert result.page_info.word_count == 320 + 6
        assert_invariants(result)

    def test_word_count_success_tier(self):
        result = analyze_document(minimal_valid_page(600), "https://example.com/page")
        word_rule = result.categories.content.issues[0]
        assert (word_rule.id, word_rule.severity, word_rule.points) == ("content-4", "success", 20)

    def test_pathological_page(self):
        result = analyze_document("<html><body></body></html>", "http://x")
        categories = result.categories

        for rule_id in ("meta-1", "meta-5", "meta-17"):
            issue = categories.meta.issue(rule_id)
            assert issue.severity == "critical"
            assert issue.points == 0
        assert categories.headings.issue("heading-1").severity == "critical"
        assert categories.technical.issue("tech-7").severity == "critical"
        assert result.summary.critical >= 5
        assert_invariants(result)

    def test_duplicate_h1(self, make_page):
        body = "<h1>Our first top level heading</h1><h1>Our second top level heading</h1>"
        issue = analyze_document(make_page(body=body)).categories.headings.issue("heading-2")

        assert issue.severity == "warning"
        assert (issue.points, issue.max_points) == (15, 30)

    def test_all_images_missing_alt(self, make_page):
        body = '<img src="1.png"><img src="2.png"><img src="3.png">'
        images = analyze_document(make_page(body=body)).categories.images

        alt_rule = images.issues[0]
        assert alt_rule.severity == "critical"
        assert (alt_rule.points, alt_rule.max_points) == (0, 35)
        summary_rule = images.issue("img-10")
        assert summary_rule.description.startswith("Total: 3 | ")
        assert summary_rule.description.endswith("No Alt: 3")


class TestRobustness:
    def test_empty_input_reports_missing_branches(self):
        result = analyze_document("", "")
        categories = result.categories

        expected_missing = {
            "meta": ["meta-1", "meta-5", "meta-9", "meta-15", "meta-17"],
            "headings": ["heading-1", "heading-6", "heading-9"],
            "images": ["img-1"],
            "links": ["link-1"],
            "technical": ["tech-1", "tech-3", "tech-5", "tech-16"],
            "mobile": ["mobile-1", "mobile-11"],
            "social": ["social-1", "social-4"],
            "security": ["security-9"],
        }
        for key, rule_ids in expected_missing.items():
            for rule_id in rule_ids:
                assert categories[key].issue(rule_id) is not None, rule_id

        assert result.url == ""
        assert result.page_info.title == NO_TITLE
        assert result.page_info.description == NO_DESCRIPTION
        assert_invariants(result)

    def test_none_inputs_are_treated_as_empty(self):
        result = analyze_document(None, None)
        assert result.url == ""
        assert result.overall_score == analyze_document("", "").overall_score

    @pytest.mark.parametrize(
        "markup",
        [
            "\x00\x01\x02\xff" * 50,
            "<<<<>>>>" * 200,
            "<html><head><title>unterminated",
            "<img src='x' alt=\"broken><a href=<body><h1>",
            "{\"json\": \"not html\", \"list\": [1, 2, 3]}",
            "<h1>" * 300,
            "<script>if (a < b && c > d) { document.write('<h1>x</h1>') }</script>",
        ],
    )
    def test_garbage_never_raises(self, markup):
        assert_invariants(analyze_document(markup, "not a url at all"))

    @pytest.mark.parametrize("url", ["", "relative/path", "http://[::1", "://", "https://", "javascript:alert(1)"])
    def test_malformed_urls_never_raise(self, url):
        assert_invariants(analyze_document(SAMPLE_MARKUP, url))

    def test_bytes_input_is_decoded(self):
        result = analyze_document(b"<html><head><title>Bytes \xff title</title></head></html>")
        assert result.page_info.title.startswith("Bytes")

    def test_coerce_text(self):
        assert coerce_text(None) == ""
        assert coerce_text("x") == "x"
        assert coerce_text(42) == "42"
        assert coerce_text(b"abc") == "abc"


class TestLinearExtraction:
    """Unclosed or unterminated tags must not make analysis time grow with the square of the input."""

    @pytest.mark.parametrize(
        "markup",
        [
            "<script>" * 8000,
            "<p " * 20000,
            "<body>" * 10000,
            "<h1><title><style>" * 4000,
            "<p" + " " * 100_000 + "x>",
            "<" * 60000,
        ],
    )
    def test_pathological_markup_is_analyzed_quickly(self, markup):
        started = time.perf_counter()
        result = analyze_document(markup, "https://example.com/")
        elapsed = time.perf_counter() - started

        assert elapsed < 3.0
        assert_invariants(result)


class TestDeterminism:
    def test_idempotent_except_timestamp(self):
        first = analyze_document(SAMPLE_MARKUP, SAMPLE_URL)
        second = analyze_document(SAMPLE_MARKUP, SAMPLE_URL)

        exclude = {"analyzed_at"}
        assert first.model_dump_json(exclude=exclude) == second.model_dump_json(exclude=exclude)

    def test_thread_pool_matches_sequential(self):
        sequential = analyze_document(SAMPLE_MARKUP, SAMPLE_URL, workers=0)
        pooled = analyze_document(SAMPLE_MARKUP, SAMPLE_URL, workers=4)

        exclude = {"analyzed_at"}
        assert sequential.model_dump(exclude=exclude) == pooled.model_dump(exclude=exclude)

    def test_category_order_is_fixed(self):
        result = analyze_document("")
        assert [key for key, _ in result.categories.items()] == list(CATEGORY_KEYS)


class TestSerialization:
    def test_camel_case_contract(self):
        dumped = analyze_document(SAMPLE_MARKUP, SAMPLE_URL).model_dump(mode="json", by_alias=True)

        assert set(dumped) == {
            "url", "analyzedAt", "overallScore", "grade", "gradeColor", "categories", "summary", "pageInfo",
        }
        assert list(dumped["categories"]) == list(CATEGORY_KEYS)
        meta = dumped["categories"]["meta"]
        assert {"name", "icon", "score", "maxScore", "percentage", "issues"} <= set(meta)
        assert {"id", "severity", "title", "description", "fixGuidance", "impact", "points", "maxPoints"} == set(
            meta["issues"][0]
        )
        assert set(dumped["pageInfo"]) == {"title", "description", "url", "wordCount", "loadTime", "pageSize"}
        assert set(dumped["summary"]) == {"critical", "warnings", "passed", "info", "total"}

    def test_result_is_frozen(self):
        result = analyze_document("")
        with pytest.raises(ValidationError):
            result.overall_score = 100


class TestPageInfo:
    def test_sample_page_info(self):
        markup, url = sample_document()
        info = extract_page_info(markup, url)

        assert url == "https://ospranto.tech"
        assert info.title == "Best Digital Marketing Agency in Bangladesh - OSPranto Tech"
        assert info.description.startswith("OSPranto Tech is the leading digital marketing agency")
        assert info.url == url
        assert info.word_count > 150
        assert info.page_size.endswith(" KB")

    def test_word_count_needs_body(self):
        assert extract_page_info("<p>one two three</p>").word_count == 0
        assert extract_page_info("<body><p>one two</p><script>three</script></body>").word_count == 3

    @pytest.mark.parametrize("size, expected", [(0, 0.5), (25_000, 1.0), (100_000, 2.5), (10_000_000, 2.5)])
    def test_load_time_estimate(self, size, expected):
        assert estimate_load_time(size) == expected

    def test_page_size(self):
        assert extract_page_info("a" * 2048).page_size == "2.0 KB"
        assert extract_page_info("").page_size == "0.0 KB"

    def test_sample_document_scores_well(self):
        result = analyze_document(SAMPLE_MARKUP, SAMPLE_URL)
        assert result.url == SAMPLE_URL
        assert result.categories.meta.issue("meta-4") is not None
        assert result.categories.social.issue("social-2") is not None
        assert result.overall_score >= 60
        assert_invariants(result)
