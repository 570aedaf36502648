import pytest

from app.features.seo_audit.services.analyzers.security import (
    analyze_security,
    count_external_scripts,
    count_insecure_forms,
    count_insecure_resources,
)


class TestSecurityAnalyzer:
    @pytest.mark.parametrize(
        "url, expected_id, severity, points",
        [
            ("https://example.com", "security-1", "success", 40),
            ("Https://example.com", "security-1", "success", 40),
            ("http://example.com", "security-2", "critical", 0),
            ("ftp://example.com", "security-2", "critical", 0),
            ("", "security-9", "info", 20),
        ],
    )
    def test_https(self, url, expected_id, severity, points):
        issue = analyze_security("", url).issues[0]
        assert issue.id == expected_id
        assert issue.severity == severity
        assert (issue.points, issue.max_points) == (points, 40)

    def test_clean_page_without_url(self):
        category = analyze_security("")
        assert [issue.id for issue in category.issues] == ["security-9", "security-4", "security-6", "security-8"]
        assert (category.score, category.max_score) == (80, 100)

    def test_mixed_content(self):
        markup = (
            '<img src="http://cdn.example.com/a.png">'
            '<link rel="stylesheet" href="http://cdn.example.com/site.css">'
            '<a href="http://example.com/page">plain link is fine</a>'
            '<script src="https://cdn.example.com/app.js"></script>'
        )
        assert count_insecure_resources(markup) == 2

        issue = analyze_security(markup, "https://example.com").issue("security-3")
        assert issue.description.startswith("Found 2 HTTP resource(s)")
        assert (issue.points, issue.max_points) == (10, 25)

    def test_external_scripts_compare_hosts(self):
        markup = (
            '<script src="https://example.com/own.js"></script>'
            '<script src="https://cdn.other.com/lib.js"></script>'
            '<script src="/local.js"></script>'
        )
        assert count_external_scripts(markup, "example.com") == 1
        assert count_external_scripts(markup, None) == 2

    def test_many_external_scripts_is_informational(self):
        markup = "".join(f'<script src="https://cdn{i}.net/x.js"></script>' for i in range(6))
        issue = analyze_security(markup, "https://example.com").issue("security-5")
        assert issue.severity == "info"
        assert issue.description.startswith("6 external scripts")
        assert issue.points == 10

    def test_five_external_scripts_is_acceptable(self):
        markup = "".join(f'<script src="https://cdn{i}.net/x.js"></script>' for i in range(5))
        assert analyze_security(markup, "https://example.com").issue("security-6") is not None

    def test_only_plain_http_form_actions_are_insecure(self):
        markup = (
            '<form action="/subscribe"></form>'
            '<form action="https://example.com/pay"></form>'
            "<form></form>"
        )
        assert count_insecure_forms(markup) == 0
        assert count_insecure_forms('<form method="post" action="HTTP://example.com/x">') == 1

        issue = analyze_security('<form action="http://example.com/x"></form>').issue("security-7")
        assert (issue.points, issue.max_points) == (5, 15)
