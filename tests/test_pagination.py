import pytest

from services.pagination import PageWindow, coerce_page_index, compute_window


class TestComputeWindow:
    def test_zero_items_has_no_pages(self) -> None:
        window = compute_window(0, 20, 0)

        assert window.total_pages == 0
        assert window.visible_pages == ()
        assert window.has_previous is False
        assert window.has_next is False
        assert window.previous_page is None
        assert window.next_page is None

    def test_middle_page_of_five(self) -> None:
        window = compute_window(100, 20, 2)

        assert window.total_pages == 5
        assert window.visible_pages == (0, 1, 2, 3, 4)
        assert window.has_previous is True
        assert window.has_next is True
        assert window.previous_page == 1
        assert window.next_page == 3

    def test_first_page_has_no_previous(self) -> None:
        window = compute_window(100, 20, 0)

        assert window.has_previous is False
        assert window.previous_page is None
        assert window.visible_pages == (0, 1, 2)

    def test_last_page_has_no_next(self) -> None:
        window = compute_window(100, 20, 4)

        assert window.has_next is False
        assert window.next_page is None
        assert window.visible_pages == (2, 3, 4)

    def test_total_pages_rounds_up(self) -> None:
        assert compute_window(45, 20, 0).total_pages == 3
        assert compute_window(40, 20, 0).total_pages == 2
        assert compute_window(41, 20, 0).total_pages == 3
        assert compute_window(1, 20, 0).total_pages == 1

    def test_window_centred_in_long_listing(self) -> None:
        window = compute_window(200, 20, 5)

        assert window.visible_pages == (3, 4, 5, 6, 7)

    def test_second_page_window(self) -> None:
        assert compute_window(200, 20, 1).visible_pages == (0, 1, 2, 3)

    def test_single_page(self) -> None:
        window = compute_window(15, 20, 0)

        assert window.total_pages == 1
        assert window.visible_pages == (0,)
        assert window.has_previous is False
        assert window.has_next is False

    def test_custom_page_size(self) -> None:
        assert compute_window(50, 10, 0).visible_pages == (0, 1, 2)

    def test_stale_page_far_past_end(self) -> None:
        window = compute_window(100, 20, 500)

        assert window.total_pages == 5
        assert window.visible_pages == ()
        assert window.has_next is False
        assert window.has_previous is True
        assert window.previous_page == 499

    def test_page_just_past_end_keeps_partial_window(self) -> None:
        window = compute_window(100, 20, 6)

        assert window.visible_pages == (4,)
        assert window.has_next is False

    @pytest.mark.parametrize(
        "total_count,page_size,current_page",
        [(-5, 20, 0), (100, 0, 0), (100, -3, 2), (100, 20, -7)],
    )
    def test_out_of_domain_inputs_do_not_raise(self, total_count, page_size, current_page) -> None:
        window = compute_window(total_count, page_size, current_page)

        assert isinstance(window, PageWindow)
        assert all(0 <= p < max(window.total_pages, 1) for p in window.visible_pages)
        assert window.has_previous is False
        assert window.has_next is False
        assert window.next_page is None

    @pytest.mark.parametrize("current_page", [-1, -2, -3])
    def test_negative_page_never_links_forward(self, current_page) -> None:
        window = compute_window(100, 20, current_page)

        assert window.has_previous is False
        assert window.has_next is False
        assert window.next_page is None
        assert all(p >= 0 for p in window.visible_pages)

    def test_repeat_calls_are_identical(self) -> None:
        assert compute_window(1302, 20, 33) == compute_window(1302, 20, 33)

    @pytest.mark.parametrize("total_count", [0, 1, 19, 20, 21, 45, 100, 101, 1302])
    @pytest.mark.parametrize("page_size", [1, 7, 20])
    @pytest.mark.parametrize("current_page", [0, 1, 2, 3, 10, 65, 2000])
    def test_window_is_contiguous_and_in_range(self, total_count, page_size, current_page) -> None:
        window = compute_window(total_count, page_size, current_page)
        pages = window.visible_pages

        assert window.total_pages == -(-total_count // page_size)
        assert all(0 <= p <= window.total_pages - 1 for p in pages)
        if pages:
            assert list(pages) == list(range(pages[0], pages[-1] + 1))
        assert len(pages) <= 5
        assert window.has_previous == (current_page > 0 and window.total_pages > 0)
        assert window.has_next == (current_page < window.total_pages - 1)
        if window.total_pages and current_page < window.total_pages:
            assert current_page in pages

    def test_to_dict(self) -> None:
        data = compute_window(100, 20, 2).to_dict()

        assert data == {
            "current_page": 2,
            "total_pages": 5,
            "visible_pages": [0, 1, 2, 3, 4],
            "has_previous": True,
            "has_next": True,
            "previous_page": 1,
            "next_page": 3,
        }


class TestCoercePageIndex:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, 0),
            ("", 0),
            ("0", 0),
            ("3", 3),
            (" 7 ", 7),
            ("1_000", 0),
            ("\u0663", 0),
            ("12abc", 0),
            ("-2", 0),
            ("abc", 0),
            ("1.5", 0),
            (4, 4),
            (-1, 0),
            (True, 0),
            (2.0, 0),
        ],
    )
    def test_coercion(self, value, expected) -> None:
        assert coerce_page_index(value) == expected
