"""
Tests for composer.layout.paper

Test Coverage:
- select_paper_size(): auto scoring, tie-breaking, fixed orientation
- score_candidate(): scale, utilization and penalties
- auto_candidates(): enumeration order
"""
import pytest

from nup_toolkit.composer.config import PaperSizeMode
from nup_toolkit.composer.layout.models import GridConfig, PaperDimensions
from nup_toolkit.composer.layout.paper import (
    auto_candidates,
    score_all,
    score_candidate,
    select_paper_size,
)


SINGLE = GridConfig(1, 1)


class TestAutoCandidates:
    def test_order_is_portrait_then_landscape_per_size(self):
        candidates = auto_candidates()
        names = [size.value for size, _ in candidates]
        assert names == [
            "letter", "letter", "legal", "legal", "a4", "a4",
            "a3", "a3", "tabloid", "tabloid",
        ]
        assert candidates[0][1] == PaperDimensions(612, 792)
        assert candidates[1][1] == PaperDimensions(792, 612)


class TestScoreCandidate:
    def test_scale_uses_shrunk_cells(self):
        candidate = score_candidate(
            PaperSizeMode.LETTER, PaperDimensions(612, 792), 300, 400, GridConfig(2, 2)
        )
        expected_scale = min(306 * 0.98 / 300, 396 * 0.98 / 400)
        assert candidate.scale == pytest.approx(expected_scale)
        expected_util = (300 * expected_scale * 2 * 400 * expected_scale * 2) / (612 * 792)
        assert candidate.utilization == pytest.approx(expected_util)
        assert candidate.score == pytest.approx(expected_util)

    def test_upscaling_is_penalised_by_half(self):
        candidate = score_candidate(
            PaperSizeMode.LETTER, PaperDimensions(612, 792), 100, 100, SINGLE
        )
        assert candidate.scale > 1
        assert candidate.score == pytest.approx(candidate.utilization * 0.5)

    def test_tiny_scale_is_penalised_by_scale(self):
        candidate = score_candidate(
            PaperSizeMode.LETTER, PaperDimensions(612, 792), 5000, 5000, SINGLE
        )
        assert candidate.scale < 0.3
        assert candidate.score == pytest.approx(candidate.utilization * candidate.scale)


class TestSelectAuto:
    def test_letter_source_picks_letter_portrait(self):
        assert select_paper_size("auto", 612, 792, SINGLE) == PaperDimensions(612, 792)

    def test_a4_source_picks_a4_portrait(self):
        assert select_paper_size(PaperSizeMode.AUTO, 595, 842, SINGLE) == PaperDimensions(595, 842)

    def test_landscape_source_picks_landscape_paper(self):
        assert select_paper_size("auto", 842, 595, SINGLE) == PaperDimensions(842, 595)

    def test_exact_tie_keeps_first_candidate(self):
        # Square source: letter portrait and landscape score identically
        scores = score_all(100, 100, SINGLE)
        assert scores[0].score == scores[1].score
        assert select_paper_size("auto", 100, 100, SINGLE) == PaperDimensions(612, 792)

    def test_oversized_source_prefers_larger_paper(self):
        paper = select_paper_size("auto", 5000, 5000, SINGLE)
        assert paper == PaperDimensions(842, 1191)

    def test_selection_is_deterministic(self):
        grid = GridConfig(2, 3)
        first = select_paper_size("auto", 420, 297, grid)
        for _ in range(5):
            assert select_paper_size("auto", 420, 297, grid) == first

    def test_selected_paper_has_best_score(self):
        grid = GridConfig(2, 2)
        paper = select_paper_size("auto", 300, 400, grid)
        scores = score_all(300, 400, grid)
        best = max(candidate.score for candidate in scores)
        chosen = next(c for c in scores if c.paper == paper)
        assert chosen.score == best


class TestSelectFixed:
    def test_portrait_source_keeps_portrait(self):
        paper = select_paper_size("letter", 300, 400, GridConfig(2, 2))
        assert paper == PaperDimensions(612, 792)

    def test_wide_source_turns_landscape(self):
        paper = select_paper_size("letter", 800, 300, SINGLE)
        assert paper == PaperDimensions(792, 612)

    def test_orientation_compares_cell_aspect_not_paper_aspect(self):
        # Wide pages stacked 1x2 fit portrait cells (612x396) better
        paper = select_paper_size("letter", 800, 400, GridConfig(1, 2))
        assert paper == PaperDimensions(612, 792)

    @pytest.mark.parametrize(
        "mode, portrait",
        [
            ("legal", PaperDimensions(612, 1008)),
            ("a4", PaperDimensions(595, 842)),
            ("a3", PaperDimensions(842, 1191)),
            ("tabloid", PaperDimensions(792, 1224)),
        ],
    )
    def test_fixed_sizes_use_canonical_dimensions(self, mode, portrait):
        assert select_paper_size(mode, 300, 400, SINGLE) == portrait


class TestValidation:
    def test_rejects_non_positive_source(self):
        with pytest.raises(ValueError, match="positive"):
            select_paper_size("auto", 0, 400, SINGLE)

    def test_rejects_unknown_mode(self):
        with pytest.raises(ValueError):
            select_paper_size("b5", 300, 400, SINGLE)
