"""Pydantic models for the rating snapshot uploaded to the object store."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CONTENT_VERSION: int = 1


class _Record(BaseModel):
    """Base for database rows; aliases are the camelCase column names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class RatingRecord(_Record):
    """One row of mai2_profile_rating.

    The rating list columns hold opaque JSON and are carried through unchanged.
    """

    id: int
    user: int
    version: int
    rating: int
    rating_list: Any
    new_rating_list: Any
    next_rating_list: Any
    next_new_rating_list: Any
    udemae: Any


class ProfileDetail(_Record):
    """One row of mai2_profile_detail."""

    id: int
    user: int
    version: int
    user_name: str
    is_net_member: int
    icon_id: int
    plate_id: int
    title_id: int
    partner_id: int
    frame_id: int
    select_map_id: int
    total_awake: int
    grade_rating: int
    music_rating: int
    player_rating: int
    highest_rating: int
    grade_rank: int
    class_rank: int
    course_rank: int
    chara_slot: Any
    chara_lock_slot: Any
    content_bit: int
    play_count: int
    current_play_count: int
    rename_credit: int
    map_stock: int
    event_watched_date: str
    last_game_id: str
    last_rom_version: str
    last_data_version: str
    last_login_date: str
    last_pair_login_date: str
    last_play_date: str
    last_trial_play_date: str
    last_play_credit: int
    last_play_mode: int
    last_place_id: int
    last_place_name: str
    last_all_net_id: int
    last_region_id: int
    last_region_name: str
    last_client_id: str
    last_country_code: str
    last_select_e_money: int
    last_select_ticket: int
    last_select_course: int
    last_count_course: int
    first_game_id: str
    first_rom_version: str
    first_data_version: str
    first_play_date: str
    compatible_cm_version: str
    daily_bonus_date: str
    daily_course_bonus_date: str
    play_vs_count: int
    play_sync_count: int
    win_count: int
    help_count: int
    combo_count: int
    total_deluxscore: int
    total_basic_deluxscore: int
    total_advanced_deluxscore: int
    total_expert_deluxscore: int
    total_master_deluxscore: int
    total_re_master_deluxscore: int
    total_sync: int
    total_basic_sync: int
    total_advanced_sync: int
    total_expert_sync: int
    total_master_sync: int
    total_re_master_sync: int
    total_achievement: int
    total_basic_achievement: int
    total_advanced_achievement: int
    total_expert_achievement: int
    total_master_achievement: int
    total_re_master_achievement: int
    player_old_rating: int
    player_new_rating: int
    date_time: int
    ban_state: int


class Content(BaseModel):
    """Snapshot document: both tables in primary-key order plus a format version."""

    model_config = ConfigDict(frozen=True)

    rating_records: list[RatingRecord] = Field(default_factory=list)
    profile_details: list[ProfileDetail] = Field(default_factory=list)
    version: int = Field(default=CONTENT_VERSION)
