import unittest

from Service.gis_modules.topology.cut import ArcCutter

from topology_helpers import cut, feature, get_object, join, make_logger, make_state, ranges


def line(fid, *points):
    return feature(fid, "LineString", [list(p) for p in points])


def ring(fid, *points):
    return feature(fid, "Polygon", [[list(p) for p in points]])


class ArcCutterTests(unittest.TestCase):
    def test_duplicate_lines_have_no_cuts(self):
        state = cut(make_state(
            line("abc", (0, 0), (1, 0), (2, 0)),
            line("cba", (2, 0), (1, 0), (0, 0)),
        ))
        self.assertEqual(ranges(get_object(state, "abc").arc), [(0, 2)])
        self.assertEqual(ranges(get_object(state, "cba").arc), [(3, 5)])

    def test_old_arc_extending_a_new_arc_is_cut(self):
        state = cut(make_state(line("abc", (0, 0), (1, 0), (2, 0)), line("ab", (0, 0), (1, 0))))
        self.assertEqual(ranges(get_object(state, "abc").arc), [(0, 1), (1, 2)])
        self.assertEqual(ranges(get_object(state, "ab").arc), [(3, 4)])

    def test_new_line_skipping_a_point_is_cut_on_both_sides(self):
        state = cut(make_state(
            line("edcba", (4, 0), (3, 0), (2, 0), (1, 0), (0, 0)),
            line("abde", (0, 0), (1, 0), (3, 0), (4, 0)),
        ))
        self.assertEqual(ranges(get_object(state, "edcba").arc), [(0, 1), (1, 3), (3, 4)])
        self.assertEqual(ranges(get_object(state, "abde").arc), [(5, 6), (6, 7), (7, 8)])

    def test_self_intersecting_line_is_not_cut_in_the_middle(self):
        state = cut(make_state(line("abcdbe", (0, 0), (1, 0), (2, 0), (3, 0), (1, 0), (4, 0))))
        self.assertEqual(ranges(get_object(state, "abcdbe").arc), [(0, 5)])

    def test_self_intersection_at_an_endpoint_cuts_the_line(self):
        state = cut(make_state(line("abacd", (0, 0), (1, 0), (0, 0), (3, 0), (4, 0))))
        self.assertEqual(ranges(get_object(state, "abacd").arc), [(0, 2), (2, 4)])

        state = cut(make_state(line("abdcd", (0, 0), (1, 0), (4, 0), (3, 0), (4, 0))))
        self.assertEqual(ranges(get_object(state, "abdcd").arc), [(0, 2), (2, 4)])

    def test_shared_crossing_point_cuts_both_lines(self):
        state = cut(make_state(
            line("abcdbe", (0, 0), (1, 0), (2, 0), (3, 0), (1, 0), (4, 0)),
            line("fbg", (0, 1), (1, 0), (2, 1)),
        ))
        self.assertEqual(ranges(get_object(state, "abcdbe").arc), [(0, 1), (1, 4), (4, 5)])
        self.assertEqual(ranges(get_object(state, "fbg").arc), [(6, 7), (7, 8)])

    def test_closed_line_and_ring_have_no_cuts(self):
        state = cut(make_state(line("abca", (0, 0), (1, 0), (0, 1), (0, 0))))
        self.assertEqual(ranges(get_object(state, "abca").arc), [(0, 3)])

        state = cut(make_state(ring("abca", (0, 0), (1, 0), (0, 1), (0, 0))))
        self.assertEqual(ranges(get_object(state, "abca").arcs[0]), [(0, 3)])

    def test_ring_starting_at_a_junction_is_split_in_place(self):
        state = cut(make_state(
            ring("abcda", (0, 0), (1, 0), (1, 1), (0, 1), (0, 0)),
            ring("efae", (0, -1), (1, -1), (0, 0), (0, -1)),
            ring("ghcg", (0, 2), (1, 2), (1, 1), (0, 2)),
        ))
        self.assertEqual(ranges(get_object(state, "abcda").arcs[0]), [(0, 2), (2, 4)])
        self.assertEqual(ranges(get_object(state, "efae").arcs[0]), [(5, 8)])
        self.assertEqual(ranges(get_object(state, "ghcg").arcs[0]), [(9, 12)])

    def test_rings_are_rotated_to_start_at_a_shared_point(self):
        state = cut(make_state(
            ring("abca", (0, 0), (1, 0), (0, 1), (0, 0)),
            ring("dbed", (2, 1), (1, 0), (2, 2), (2, 1)),
        ))
        self.assertEqual(ranges(get_object(state, "abca").arcs[0]), [(0, 3)])
        self.assertEqual(ranges(get_object(state, "dbed").arcs[0]), [(4, 7)])
        self.assertEqual(state.coordinates[0:4], [(1, 0), (0, 1), (0, 0), (1, 0)])
        self.assertEqual(state.coordinates[4:8], [(1, 0), (2, 2), (2, 1), (1, 0)])

    def test_overlapping_rings_are_rotated_and_cut(self):
        state = cut(make_state(
            ring("abcda", (0, 0), (1, 0), (1, 1), (0, 1), (0, 0)),
            ring("befcb", (1, 0), (2, 0), (2, 1), (1, 1), (1, 0)),
        ))
        self.assertEqual(ranges(get_object(state, "abcda").arcs[0]), [(0, 1), (1, 4)])
        self.assertEqual(ranges(get_object(state, "befcb").arcs[0]), [(5, 8), (8, 9)])
        self.assertEqual(state.coordinates[0:5], [(1, 0), (1, 1), (0, 1), (0, 0), (1, 0)])

    def test_no_interior_junction_remains_after_cut(self):
        state = make_state(
            ring("abcda", (0, 0), (1, 0), (1, 1), (0, 1), (0, 0)),
            ring("befcb", (1, 0), (2, 0), (2, 1), (1, 1), (1, 0)),
            line("diag", (0, 0), (1, 1), (2, 2)),
        )
        junctions = join(state)
        ArcCutter(make_logger()).execute(state, junctions)

        for head in state.lines + state.rings:
            for node in head.chain():
                interior = state.coordinates[node.start + 1:node.end]
                self.assertFalse(any(p in junctions for p in interior), (node.start, node.end))


if __name__ == "__main__":
    unittest.main()
