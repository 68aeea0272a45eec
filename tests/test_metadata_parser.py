from content_engine.engine import ImportedMetadataRecord, parse_metadata_text

PASTED = """
IMAGE URL
hero-roof.jpg

IMAGE FILE NAME
hero-roof

IMAGE (SEARCH) TITLE
New roof in Sussex

IMAGE ALT TEXT
Crew finishing a new asphalt roof

IMAGE URL
gutter.jpg
IMAGE FILE NAME

gutter-cleaning
Image Description
Clean gutters after service
"""


def test_parses_repeated_blocks_in_order() -> None:
    records = parse_metadata_text(PASTED)

    assert records == [
        ImportedMetadataRecord(
            order=1,
            file_name="hero-roof",
            alt_text="Crew finishing a new asphalt roof",
            search_title="New roof in Sussex",
            image_url="hero-roof.jpg",
        ),
        ImportedMetadataRecord(
            order=2,
            file_name="gutter-cleaning",
            alt_text="Clean gutters after service",
            image_url="gutter.jpg",
        ),
    ]


def test_headings_are_case_insensitive_and_allow_colons() -> None:
    text = "image url:\na.jpg\nImage Search Title\nTitle A\nimage alt\nAlt A"

    records = parse_metadata_text(text)

    assert records == [
        ImportedMetadataRecord(order=1, image_url="a.jpg", search_title="Title A", alt_text="Alt A")
    ]


def test_values_without_a_heading_are_ignored() -> None:
    text = "Intro paragraph\nIMAGE FILE NAME\nporch\nstray line"

    assert parse_metadata_text(text) == [ImportedMetadataRecord(order=1, file_name="porch")]


def test_long_value_lines_are_not_mistaken_for_headings() -> None:
    text = "IMAGE ALT TEXT\nImage title shown above the porch steps"

    records = parse_metadata_text(text)

    assert records[0].alt_text == "Image title shown above the porch steps"


def test_empty_text_yields_no_records() -> None:
    assert parse_metadata_text("") == []
    assert parse_metadata_text("\n\n  \n") == []


def test_heading_like_value_is_kept_as_the_value() -> None:
    text = "IMAGE URL\nroof.jpg\nIMAGE (SEARCH) TITLE\nImage Search Tips\nIMAGE ALT TEXT\nCrew on roof"

    records = parse_metadata_text(text)

    assert records == [
        ImportedMetadataRecord(
            order=1,
            image_url="roof.jpg",
            search_title="Image Search Tips",
            alt_text="Crew on roof",
        )
    ]


def test_exact_heading_interrupts_a_missing_value() -> None:
    text = "IMAGE URL\nIMAGE FILE NAME\nporch"

    assert parse_metadata_text(text) == [ImportedMetadataRecord(order=1, file_name="porch")]
