from ableplayer_media.backend.host.page import JQUERY_PATH, Page, PageRequirements


def test_requirements_are_deduplicated_in_order() -> None:
    requires = PageRequirements()
    requires.js("/a.js")
    requires.js("/b.js", in_head=True)
    requires.js("/a.js")
    requires.css("/a.css")
    requires.css("/a.css")
    assert [s.url for s in requires.scripts] == ["/a.js", "/b.js"]
    assert requires.styles == ["/a.css"]


def test_script_is_promoted_to_head() -> None:
    requires = PageRequirements()
    requires.js("/a.js")
    requires.js("/a.js", in_head=True)
    assert requires.scripts[0].in_head is True


def test_paths_resolve_against_wwwroot() -> None:
    requires = PageRequirements("https://lms.example.com/")
    requires.js("lib/a.js")
    requires.js("https://cdn.example.com/b.js")
    requires.css("//cdn.example.com/c.css")
    assert [s.url for s in requires.scripts] == [
        "https://lms.example.com/lib/a.js",
        "https://cdn.example.com/b.js",
    ]
    assert requires.styles == ["//cdn.example.com/c.css"]


def test_head_and_footer_code() -> None:
    page = Page()
    page.requires.jquery()
    page.requires.js("/player.js")
    page.requires.css("/player.css")
    assert page.requires.head_code().splitlines() == [
        '<link rel="stylesheet" type="text/css" href="/player.css" />',
        f'<script src="{JQUERY_PATH}"></script>',
    ]
    assert page.requires.footer_code() == '<script src="/player.js"></script>'
