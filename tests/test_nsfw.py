from chatplugins.nsfw import Picture, auto_judge, judge


def test_judge_neutral():
    assert judge(Picture(neutral=0.9)) == "普通哦"


def test_judge_drawing_with_tags():
    result = judge(Picture(drawings=0.5, hentai=0.6, sexy=0.4, neutral=0.1))
    assert result == "二次元 hentai hso"


def test_judge_low_neutral_counts_as_drawing():
    assert judge(Picture(drawings=0.0, neutral=0.1, porn=0.8)) == "二次元 porn"


def test_judge_three_dimensional_at_boundary():
    assert judge(Picture(drawings=0.1, neutral=0.3)) == "三次元"


def test_auto_judge_neutral_is_silent():
    assert auto_judge(Picture(neutral=0.5, porn=0.9)) is None


def test_auto_judge_without_tags_is_silent():
    assert auto_judge(Picture(drawings=0.9, neutral=0.05)) is None


def test_auto_judge_real_photo():
    result = auto_judge(Picture(drawings=0.1, neutral=0.1, porn=0.7))
    assert result.startswith("三次元")
    assert " porn" in result


def test_auto_judge_all_tags_order():
    result = auto_judge(Picture(drawings=0.5, hentai=0.5, porn=0.5, sexy=0.5))
    assert result.strip() == "二次元 hentai porn hso"