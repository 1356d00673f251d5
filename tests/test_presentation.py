from datetime import datetime, timezone

from schemas.recipe_schemas import RecipeResponse
from utils.presentation import build_recipe_card, cn


def make_recipe(**overrides) -> RecipeResponse:
    now = datetime.now(timezone.utc)
    data = {
        "id": "1",
        "title": "Bolo de Cenoura",
        "description": "Um bolo delicioso de cenoura com cobertura de chocolate.",
        "prep_time": "20",
        "cook_time": "40",
        "servings": "8",
        "difficulty": "facil",
        "category": "sobremesas",
        "rating": 4.5,
        "tags": ["doce", "chocolate", "caseiro"],
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return RecipeResponse(**data)


class TestCn:
    def test_merges_class_names(self):
        assert cn("text-red-500", "bg-blue-500") == "text-red-500 bg-blue-500"

    def test_drops_falsy_conditionals(self):
        assert cn("text-red-500", True and "bg-blue-500", False and "hidden") == "text-red-500 bg-blue-500"

    def test_later_padding_overrides_axis_padding(self):
        assert cn("px-2 py-2", "p-4") == "p-4"

    def test_axis_padding_after_shorthand_is_kept(self):
        assert cn("p-4", "px-2") == "p-4 px-2"

    def test_font_size_and_text_color_do_not_conflict(self):
        assert cn("text-sm text-red-500", "text-lg") == "text-red-500 text-lg"

    def test_modifiers_are_separate_groups(self):
        assert cn("text-muted-foreground", "hover:text-accent") == "text-muted-foreground hover:text-accent"
        assert cn("hover:text-muted", "hover:text-accent") == "hover:text-accent"

    def test_dict_and_list_inputs(self):
        assert cn(["flex", None], {"hidden": False, "items-center": True}) == "flex items-center"

    def test_unknown_classes_are_kept(self):
        assert cn("book-page", "hover-lift", "book-page") == "hover-lift book-page"


class TestRecipeCard:
    def test_shows_first_two_tags_and_overflow_badge(self):
        card = build_recipe_card(make_recipe())

        assert card.visible_tags == ["doce", "chocolate"]
        assert card.hidden_tag_count == 1
        assert card.overflow_badge == "+1"

    def test_no_badge_with_two_tags(self):
        card = build_recipe_card(make_recipe(tags=["doce", "chocolate"]))

        assert card.visible_tags == ["doce", "chocolate"]
        assert card.overflow_badge is None

    def test_servings_total_time_and_rating(self):
        card = build_recipe_card(make_recipe())

        assert card.servings_label == "8 porções"
        assert card.total_time == "60 min"
        assert card.rating == 4.5
        assert card.image_url == "/placeholder.svg"

    def test_favorite_icon_classes(self):
        favorite = build_recipe_card(make_recipe(), is_favorite=True)
        regular = build_recipe_card(make_recipe(), is_favorite=False)

        assert "fill-current" in favorite.favorite_icon_class
        assert "text-muted-foreground" not in favorite.favorite_icon_class
        assert "fill-current" not in regular.favorite_icon_class
        assert "hover:text-accent" in regular.favorite_icon_class
