"""Shared Eijiro sample data."""
import pytest


SAMPLE_EXPORT = "\n".join([
    "■abandon  {動-1} : 捨てる、見捨てる",
    "■abandon  {動-2} : 断念する■・abandon a plan 計画を断念する",
    "■abandon  【レベル】3、【発音】əbǽndən、【＠】アバンダン、【変化】《動》abandons | abandoning | abandoned、【分節】a・ban・don",
    "",
    "■ability  {名} : 能力",
    "■ability  {名} : 才能",
    "　",
    "■ability  【レベル】2、【発音】əbíləti、【＠】アビリティ、【分節】a・bil・i・ty",
    "■able  {形} : できる",
    "■abnormal  {形} : 異常な",
    "■abnormal  【発音】æbnɔ́ːrməl",
    "■abroad  {副} : 外国に",
    "■abroad  【レベル】1、【発音】əbrɔ́ːd、【＠】アブロード",
])

# Only characters that exist in cp932, for encoding round trips.
CP932_EXPORT = "\r\n".join([
    "■run  {動} : 走る■・run fast 速く走る",
    "■run  【レベル】1、【発音】ran、【＠】ラン、",
    "■walk  {動} : 歩く",
    "■walk  【レベル】2、【＠】ウォーク",
])


@pytest.fixture
def sample_export():
    return SAMPLE_EXPORT


@pytest.fixture
def cp932_export():
    return CP932_EXPORT
