import unittest

from topology_helpers import feature, join, make_state


def line(fid, *points):
    return feature(fid, "LineString", [list(p) for p in points])


def ring(fid, *points):
    return feature(fid, "Polygon", [[list(p) for p in points]])


class JunctionDetectorTests(unittest.TestCase):
    def assertJunctions(self, junctions, expected):
        self.assertEqual(junctions, {(float(x), float(y)) for x, y in expected})

    def test_line_endpoints_are_junctions(self):
        junctions = join(make_state(line("cba", (2, 0), (1, 0), (0, 0)), line("ab", (0, 0), (1, 0))))
        self.assertIn((2, 0), junctions)
        self.assertIn((0, 0), junctions)

    def test_interior_point_of_a_single_line_is_not_a_junction(self):
        junctions = join(make_state(line("cba", (2, 0), (1, 0), (0, 0)), line("ac", (0, 0), (2, 0))))
        self.assertNotIn((1, 0), junctions)

    def test_exact_duplicate_lines_have_junctions_at_their_end_points(self):
        junctions = join(make_state(
            line("abc", (0, 0), (1, 0), (2, 0)),
            line("abc2", (0, 0), (1, 0), (2, 0)),
        ))
        self.assertJunctions(junctions, [(0, 0), (2, 0)])

    def test_reversed_duplicate_lines_have_junctions_at_their_end_points(self):
        junctions = join(make_state(
            line("abc", (0, 0), (1, 0), (2, 0)),
            line("cba", (2, 0), (1, 0), (0, 0)),
        ))
        self.assertJunctions(junctions, [(0, 0), (2, 0)])

    def test_exact_duplicate_rings_have_no_junctions(self):
        junctions = join(make_state(
            ring("abca", (0, 0), (1, 0), (0, 1), (0, 0)),
            ring("abca2", (0, 0), (1, 0), (0, 1), (0, 0)),
        ))
        self.assertJunctions(junctions, [])

    def test_reversed_duplicate_rings_have_no_junctions(self):
        junctions = join(make_state(
            ring("abca", (0, 0), (1, 0), (0, 1), (0, 0)),
            ring("acba", (0, 0), (0, 1), (1, 0), (0, 0)),
        ))
        self.assertJunctions(junctions, [])

    def test_rotated_duplicate_rings_have_no_junctions(self):
        junctions = join(make_state(
            ring("abca", (0, 0), (1, 0), (0, 1), (0, 0)),
            ring("bcab", (1, 0), (0, 1), (0, 0), (1, 0)),
        ))
        self.assertJunctions(junctions, [])

    def test_ring_and_closed_line_share_a_junction_at_the_line_start(self):
        junctions = join(make_state(
            ring("abca", (0, 0), (1, 0), (0, 1), (0, 0)),
            line("abca2", (0, 0), (1, 0), (0, 1), (0, 0)),
        ))
        self.assertJunctions(junctions, [(0, 0)])

    def test_rotated_ring_and_closed_line_share_a_junction_at_the_line_start(self):
        junctions = join(make_state(
            ring("bcab", (1, 0), (0, 1), (0, 0), (1, 0)),
            line("abca", (0, 0), (1, 0), (0, 1), (0, 0)),
        ))
        self.assertJunctions(junctions, [(0, 0)])

        junctions = join(make_state(
            ring("abca", (0, 0), (1, 0), (0, 1), (0, 0)),
            line("bcab", (1, 0), (0, 1), (0, 0), (1, 0)),
        ))
        self.assertJunctions(junctions, [(1, 0)])

    def test_old_arc_extending_a_new_arc_has_a_junction_at_the_split(self):
        junctions = join(make_state(line("abc", (0, 0), (1, 0), (2, 0)), line("ab", (0, 0), (1, 0))))
        self.assertJunctions(junctions, [(0, 0), (1, 0), (2, 0)])

    def test_reversed_old_arc_extending_a_new_arc_has_a_junction_at_the_split(self):
        junctions = join(make_state(line("cba", (2, 0), (1, 0), (0, 0)), line("ab", (0, 0), (1, 0))))
        self.assertJunctions(junctions, [(0, 0), (1, 0), (2, 0)])

    def test_new_arc_sharing_only_the_start_adds_no_interior_junction(self):
        junctions = join(make_state(
            line("abc", (0, 0), (1, 0), (2, 0)),
            line("ade", (0, 0), (1, 1), (2, 1)),
        ))
        self.assertJunctions(junctions, [(0, 0), (2, 0), (2, 1)])

    def test_degenerate_rings_have_no_junctions(self):
        for coords in ([(0, 0), (1, 0), (0, 0)], [(0, 0), (0, 0)], [(0, 0)]):
            with self.subTest(points=coords):
                junctions = join(make_state(ring("r", *coords)))
                self.assertJunctions(junctions, [])

    def test_new_line_deviating_from_an_old_line_has_a_junction_at_the_fork(self):
        junctions = join(make_state(
            line("abc", (0, 0), (1, 0), (2, 0)),
            line("abd", (0, 0), (1, 0), (3, 0)),
        ))
        self.assertJunctions(junctions, [(0, 0), (1, 0), (2, 0), (3, 0)])

    def test_new_line_merging_into_a_reversed_old_line_has_a_junction_at_the_merge(self):
        junctions = join(make_state(
            line("cba", (2, 0), (1, 0), (0, 0)),
            line("dbc", (3, 0), (1, 0), (2, 0)),
        ))
        self.assertJunctions(junctions, [(0, 0), (1, 0), (2, 0), (3, 0)])

    def test_lines_sharing_a_single_midpoint_have_a_junction_there(self):
        junctions = join(make_state(
            line("abc", (0, 0), (1, 0), (2, 0)),
            line("dbe", (0, 1), (1, 0), (2, 1)),
        ))
        self.assertJunctions(junctions, [(0, 0), (1, 0), (2, 0), (0, 1), (2, 1)])

    def test_skipped_point_creates_junctions_on_both_sides(self):
        for first in ([(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)], [(4, 0), (3, 0), (2, 0), (1, 0), (0, 0)]):
            with self.subTest(first=first):
                junctions = join(make_state(
                    line("old", *first),
                    line("abde", (0, 0), (1, 0), (3, 0), (4, 0)),
                ))
                self.assertJunctions(junctions, [(0, 0), (1, 0), (3, 0), (4, 0)])

    def test_self_intersections_alone_add_no_junctions(self):
        cases = [
            [(0, 0), (1, 0), (2, 0), (3, 0), (1, 0), (4, 0)],
            [(0, 0), (1, 0), (0, 0), (3, 0), (4, 0)],
            [(0, 0), (1, 0), (4, 0), (3, 0), (4, 0)],
        ]
        for coords in cases:
            with self.subTest(points=coords):
                junctions = join(make_state(line("self", *coords)))
                self.assertJunctions(junctions, [(0, 0), (4, 0)])

    def test_self_intersecting_line_sharing_its_crossing_point(self):
        junctions = join(make_state(
            line("abcdbe", (0, 0), (1, 0), (2, 0), (3, 0), (1, 0), (4, 0)),
            line("fbg", (0, 1), (1, 0), (2, 1)),
        ))
        self.assertJunctions(junctions, [(0, 0), (0, 1), (1, 0), (2, 1), (4, 0)])

    def test_closed_line_has_a_junction_at_its_start(self):
        junctions = join(make_state(line("abca", (0, 0), (1, 0), (0, 1), (0, 0))))
        self.assertJunctions(junctions, [(0, 0)])

    def test_closed_ring_has_no_junctions(self):
        junctions = join(make_state(ring("abca", (0, 0), (1, 0), (0, 1), (0, 0))))
        self.assertJunctions(junctions, [])

    def test_rings_touching_at_one_point_share_a_junction(self):
        junctions = join(make_state(
            ring("abca", (0, 0), (1, 0), (0, 1), (0, 0)),
            ring("dbed", (2, 1), (1, 0), (2, 2), (2, 1)),
        ))
        self.assertJunctions(junctions, [(1, 0)])

    def test_ring_touched_by_a_line_shares_a_junction(self):
        junctions = join(make_state(
            ring("abca", (0, 0), (1, 0), (0, 1), (0, 0)),
            line("dbe", (2, 1), (1, 0), (2, 2)),
        ))
        self.assertJunctions(junctions, [(1, 0), (2, 1), (2, 2)])


if __name__ == "__main__":
    unittest.main()
