import matplotlib
matplotlib.use('Agg')

from bspgeom import PolygonsSet, PrecisionContext, SubLine, visualization


def test_plot_region_writes_png(tmp_path):
    region = PolygonsSet.from_vertices([(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)], PrecisionContext())
    out = tmp_path / 'l_shape.png'
    result = visualization.plot_region(region, outname=str(out), box=(-1, 3, -1, 3), resolution=40, title='L')
    assert result is None
    assert out.exists() and out.stat().st_size > 0


def test_plot_segments_clips_infinite_ends():
    whole = SubLine.from_points((0, 0), (1, 1), PrecisionContext()).line.whole_hyperplane()
    ax = visualization.plot_segments(whole.get_segments(), box=(-2, 2, -2, 2))
    xs, ys = ax.lines[0].get_data()
    assert all(abs(v) < 1e6 for v in list(xs) + list(ys))
