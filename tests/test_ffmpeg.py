from __future__ import annotations

from autozoom.ffmpeg import easing_expr, frame_index, piecewise_expr, zoompan_filter
from autozoom.models import Easing, Keyframe


def _ramp():
    return [
        Keyframe(time=0.0, zoom=1.0, x=960.0, y=540.0, easing=Easing.LINEAR),
        Keyframe(time=1000.0, zoom=2.0, x=960.0, y=540.0),
    ]


def test_frame_index() -> None:
    assert frame_index(1000, 30) == 30
    assert frame_index(16.7, 60) == 1
    assert frame_index(-500, 30) == 0


def test_easing_expr() -> None:
    assert easing_expr(Easing.LINEAR, "p") == "(p)"
    assert easing_expr(Easing.EASE_OUT_CUBIC, "p") == "(1-pow(1-p,3))"
    assert easing_expr(Easing.EASE_IN_CUBIC, "p") == "pow(p,3)"


class TestPiecewise:
    def test_linear_ramp(self) -> None:
        expr = piecewise_expr(_ramp(), 30, lambda kf: kf.zoom)
        assert expr == "if(lt(n,0),1,if(between(n,0,30),1+(1)*((n-0)/30),2))"

    def test_flat_segment(self) -> None:
        expr = piecewise_expr(_ramp(), 30, lambda kf: kf.x)
        assert expr == "if(lt(n,0),960,if(between(n,0,30),960,960))"

    def test_single_keyframe_is_constant(self) -> None:
        assert piecewise_expr(_ramp()[:1], 30, lambda kf: kf.zoom) == "1"

    def test_same_frame_segments_skipped(self) -> None:
        keyframes = [Keyframe(time=0.0, zoom=1.0, x=0.0, y=0.0), Keyframe(time=10.0, zoom=2.0, x=0.0, y=0.0)]
        assert piecewise_expr(keyframes, 30, lambda kf: kf.zoom) == "if(lt(n,0),1,2)"

    def test_segment_easing_used(self) -> None:
        keyframes = [
            Keyframe(time=0.0, zoom=1.0, x=0.0, y=0.0),
            Keyframe(time=1000.0, zoom=1.5, x=0.0, y=0.0, easing=Easing.EASE_OUT_CUBIC),
            Keyframe(time=2000.0, zoom=1.0, x=0.0, y=0.0),
        ]
        expr = piecewise_expr(keyframes, 30, lambda kf: kf.zoom)
        assert "if(between(n,0,30),1+(0.5)*((n-0)/30)," in expr
        assert "if(between(n,30,60),1.5+(-0.5)*(1-pow(1-(n-30)/30,3))," in expr
        assert expr.count("(") == expr.count(")")


class TestZoompanFilter:
    def test_empty_is_identity(self) -> None:
        assert zoompan_filter([], 1920, 1080) == (
            "zoompan=z=1:x='iw/2-(iw/zoom/2)':y='ih/2-(ih/zoom/2)':d=1:s=1920x1080:fps=60"
        )

    def test_keyframed_filter(self) -> None:
        flt = zoompan_filter(_ramp(), 1920, 1080, fps=30)
        assert flt.startswith("zoompan=z='if(lt(n,0),1,if(between(n,0,30),1+(1)*((n-0)/30),2))'")
        assert "x='max(0,min(iw-iw/zoom,(if(lt(n,0),960," in flt
        assert "*iw/1920-iw/zoom/2))'" in flt
        assert "*ih/1080-ih/zoom/2))'" in flt
        assert flt.endswith(":d=1:s=1920x1080:fps=30")
        assert flt.count("(") == flt.count(")")

