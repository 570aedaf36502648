from app.features.seo_audit.services.analyzers.images import analyze_images, collect_image_stats


class TestImagesAnalyzer:
    def test_no_images_gets_half_credit(self, make_page):
        category = analyze_images(make_page(body="<p>text only</p>"))

        assert [issue.id for issue in category.issues] == ["img-1"]
        assert category.issues[0].severity == "info"
        assert (category.score, category.max_score) == (50, 100)
        assert category.percentage == 50

    def test_all_images_missing_alt(self, make_page):
        body = '<img src="a.jpg"><img src="b.jpg"><img src="c.jpg">'
        category = analyze_images(make_page(body=body))

        alt = category.issues[0]
        assert alt.id == "img-2"
        assert alt.severity == "critical"
        assert (alt.points, alt.max_points) == (0, 35)
        assert alt.description.startswith("3 image(s) have no alt attribute")

        summary = category.issue("img-10")
        assert summary.description == "Total: 3 | With Alt: 0 | Empty Alt: 0 | No Alt: 3"
        assert summary.points == 20

        assert category.issue("img-5").points == 10
        assert category.issue("img-8").description.startswith("3 image(s)")

    def test_missing_alt_dominates_empty_alt(self, make_page):
        body = '<img src="a.jpg" alt=""><img src="b.jpg"><img src="c.jpg" alt="Cat">'
        category = analyze_images(make_page(body=body))
        assert category.issues[0].id == "img-2"
        assert category.issues[0].description.startswith("1 image(s)")

    def test_empty_alt_is_a_warning(self, make_page):
        body = '<img src="a.jpg" alt="  "><img src="b.jpg" alt>'
        issue = analyze_images(make_page(body=body)).issues[0]
        assert issue.id == "img-3"
        assert (issue.points, issue.max_points) == (20, 35)

    def test_all_alt_present(self, make_page):
        body = '<img src="a.jpg" alt="A">'
        issue = analyze_images(make_page(body=body)).issues[0]
        assert issue.id == "img-4"
        assert issue.description == "All 1 image(s) have alt attributes. Great for accessibility and SEO!"

    def test_lazy_loading_tiers(self, make_page):
        two_plain = '<img src="a" alt="a"><img src="b" alt="b">'
        three_plain = two_plain + '<img src="c" alt="c">'
        one_lazy = three_plain + '<img src="d" alt="d" loading="LAZY">'

        assert analyze_images(make_page(body=two_plain)).issues[1].id == "img-7"
        assert analyze_images(make_page(body=three_plain)).issues[1].id == "img-5"
        lazy = analyze_images(make_page(body=one_lazy)).issues[1]
        assert lazy.id == "img-6"
        assert lazy.description.startswith("1 image(s) use lazy loading")

    def test_dimensions_require_both_attributes_on_every_image(self, make_page):
        partial = '<img src="a" alt="a" width="10" height="10"><img src="b" alt="b" width="10">'
        complete = '<img src="a" alt="a" width="10" height="10">'

        assert analyze_images(make_page(body=partial)).issue("img-8").description.startswith("1 image(s)")
        assert analyze_images(make_page(body=complete)).issue("img-9").points == 20

    def test_category_total_is_one_hundred_with_images(self, make_page):
        category = analyze_images(make_page(body='<img src="a" alt="a" width="1" height="1">'))
        assert category.max_score == 100
        # alt 35 + optional lazy 20 + dimensions 20 + summary 20
        assert category.score == 95

    def test_collect_image_stats(self):
        stats = collect_image_stats('<img alt="x" data-width="3"><IMG ALT="" loading=lazy>')
        assert stats.total == 2
        assert stats.with_alt == 1
        assert stats.empty_alt == 1
        assert stats.lazy == 1
        assert stats.with_dimensions == 0
