import unittest
import numpy as np

from SpotTrackTools.tracking.points import Point, Track, TrackSet
from SpotTrackTools.tracking.renderers import (
    RESULTS_COLUMNS,
    shapes_to_records,
    tracks_to_results_table,
    tracks_to_shapes,
)
from SpotTrackTools.tracking.tag_filter import InvalidFilterKeywordError


def make_track_set(*tags_per_track):
    tracks = TrackSet()
    for tags in tags_per_track:
        track = Track(Point(0, 0, tags[0], frame=0))
        for t, tag in enumerate(tags[1:], start=1):
            track.add_point(Point(t, t, tag, frame=t))
        tracks.add(track)
    return tracks


class TestResultsTable(unittest.TestCase):

    def setUp(self):
        self.channel_1 = make_track_set(["a", "b"], ["Prox", "c", "d"])
        self.channel_2 = make_track_set(["Coloc", "e"])

    def test_all_tracks(self):
        table = tracks_to_results_table([self.channel_1, self.channel_2])
        self.assertEqual(list(table.columns), RESULTS_COLUMNS)
        self.assertEqual(len(table), 7)
        self.assertEqual(table["track"].tolist(), [1, 1, 2, 2, 2, 1, 1])
        self.assertEqual(table["channel"].tolist(), [1, 1, 1, 1, 1, 2, 2])
        self.assertEqual(table["point"].tolist(), [1, 2, 1, 2, 3, 1, 2])
        self.assertEqual(table.loc[2, "track_tag"], "Prox\tc\td")

    def test_filtered(self):
        table = tracks_to_results_table([self.channel_1, self.channel_2], "ProxOnly")
        self.assertEqual(table["track"].unique().tolist(), [2])
        self.assertEqual(table["channel"].unique().tolist(), [1])

        table = tracks_to_results_table([self.channel_1, self.channel_2], "NonProxColoc")
        self.assertEqual(len(table), 2)
        self.assertEqual(table["tag"].tolist(), ["a", "b"])

    def test_single_track_set(self):
        table = tracks_to_results_table(self.channel_2)
        self.assertEqual(table["channel"].tolist(), [1, 1])

    def test_channel_labels_from_mapping(self):
        table = tracks_to_results_table({5: self.channel_2, 2: self.channel_1})
        self.assertEqual(table["channel"].tolist(), [2, 2, 2, 2, 2, 5, 5])
        self.assertEqual(table["track"].tolist(), [1, 1, 2, 2, 2, 1, 1])

    def test_single_track_set_channel_label(self):
        table = tracks_to_results_table(self.channel_2, channel=3)
        self.assertEqual(table["channel"].tolist(), [3, 3])

    def test_empty(self):
        table = tracks_to_results_table([], "All")
        self.assertTrue(table.empty)
        self.assertEqual(list(table.columns), RESULTS_COLUMNS)

    def test_unknown_keyword(self):
        with self.assertRaises(InvalidFilterKeywordError):
            tracks_to_results_table([self.channel_1], "Other")


class TestShapes(unittest.TestCase):

    def test_shapes(self):
        channel_1 = make_track_set(["a", "b"], ["Coloc", "c"])
        channel_2 = make_track_set(["x", "y", "z"])
        shapes = tracks_to_shapes([channel_1, channel_2], colors=["red", None])

        self.assertEqual(
            [s.name for s in shapes],
            ["Track_1 Channel 1", "Track_2 Channel 1", "Track_1 Channel 2"],
        )
        self.assertEqual([s.color for s in shapes], ["red", "red", None])
        np.testing.assert_array_equal(
            shapes[2].vertices, np.array([[0, 0], [1, 1], [2, 2]], dtype=float)
        )

    def test_filtered_shapes_keep_track_numbers(self):
        channel_1 = make_track_set(["a", "b"], ["Coloc", "c"])
        shapes = tracks_to_shapes(channel_1, "Coloc")
        self.assertEqual([s.name for s in shapes], ["Track_2 Channel 1"])
        self.assertEqual(shapes[0].tag, "Coloc\tc")

    def test_shapes_keep_channel_labels(self):
        channel_a = make_track_set(["a", "b"])
        channel_b = make_track_set(["c", "d"], ["Prox", "e"])
        shapes = tracks_to_shapes({7: channel_b, 2: channel_a}, colors=["red", "blue"])
        self.assertEqual(
            [s.name for s in shapes],
            ["Track_1 Channel 2", "Track_1 Channel 7", "Track_2 Channel 7"],
        )
        self.assertEqual([s.channel for s in shapes], [2, 7, 7])
        self.assertEqual([s.color for s in shapes], ["red", "blue", "blue"])

        single = tracks_to_shapes(channel_a, channel=0)
        self.assertEqual(single[0].name, "Track_1 Channel 0")

    def test_records(self):
        shapes = tracks_to_shapes(make_track_set(["a", "b"]))
        records = shapes_to_records(shapes)
        self.assertEqual(records[0]["vertices"], [[0.0, 0.0], [1.0, 1.0]])
        self.assertEqual(records[0]["name"], "Track_1 Channel 1")


if __name__ == "__main__":
    unittest.main()
