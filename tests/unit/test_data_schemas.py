"""
Tests for data schemas (Landmark and LandmarkRecord).
"""
import pytest
from pydantic import ValidationError

from landmark_radar.data.schemas import Landmark, LandmarkRecord


class TestLandmark:
    """Tests for the Landmark model."""

    def test_valid_landmark(self):
        landmark = Landmark(
            id=3,
            title='Beffroi de Béthune',
            audio_path='audio/bethune.mp3',
            latitude=50.5303,
            longitude=2.6408,
        )

        assert landmark.id == 3
        assert landmark.source is None
        assert landmark.location_coerced is False

    def test_title_stripped(self):
        landmark = Landmark(id=0, title='  Lille  ', latitude=0, longitude=0)
        assert landmark.title == 'Lille'

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            Landmark(id=0, title='', latitude=0, longitude=0)

    @pytest.mark.parametrize("lat,lon", [(91, 0), (-91, 0), (0, 181), (0, -181)])
    def test_out_of_range(self, lat, lon):
        with pytest.raises(ValidationError):
            Landmark(id=0, title='A', latitude=lat, longitude=lon)

    def test_negative_id_rejected(self):
        with pytest.raises(ValidationError):
            Landmark(id=-1, title='A', latitude=0, longitude=0)

    def test_frozen(self):
        landmark = Landmark(id=0, title='A', latitude=0, longitude=0)
        with pytest.raises(ValidationError):
            landmark.title = 'B'

    def test_hashable(self):
        landmark = Landmark(id=0, title='A', latitude=0, longitude=0)
        assert {landmark: 1}[landmark] == 1


class TestLandmarkRecord:
    """Tests for raw catalog records."""

    def test_french_field_names(self):
        record = LandmarkRecord.model_validate({
            'titre': 'Beffroi',
            'path': 'a.mp3',
            'localisation': {'latitude': 50.0},
        })

        assert record.title == 'Beffroi'
        assert record.audio_path == 'a.mp3'
        assert record.location == {'latitude': 50.0}

    def test_english_field_names(self):
        record = LandmarkRecord.model_validate({'title': 'Tower', 'audio': 'b.mp3', 'location': {}})
        assert record.title == 'Tower'
        assert record.audio_path == 'b.mp3'

    def test_unknown_fields_ignored(self):
        record = LandmarkRecord.model_validate({'title': 'A', 'height_m': 104})
        assert not hasattr(record, 'height_m')

    def test_blank_strings_are_none(self):
        record = LandmarkRecord.model_validate({'title': '   ', 'path': '', 'source': None})
        assert record.title is None
        assert record.audio_path is None
        assert record.source is None

    def test_non_string_title_converted(self):
        record = LandmarkRecord.model_validate({'title': 1789})
        assert record.title == '1789'

    def test_non_mapping_location(self):
        record = LandmarkRecord.model_validate({'location': 'Lille'})
        assert record.location is None
