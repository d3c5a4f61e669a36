"""
===============================================================================
knowledgebase.py — Static reference data for recipe import
===============================================================================

-------------------------------------------------------------------------------
Purpose:
    Centralizes the site knowledge and reference tables used by the engine,
    so they can be extended without touching the extraction algorithms.

-------------------------------------------------------------------------------
Contents:
    • NUTRITION_DB — per-base-unit macros for common ingredients.
      ROW ORDER IS SIGNIFICANT: the first matching row wins, so e.g. the
      generic "oil" row also answers for "olive oil".
    • NAV_PHRASES / LISTICLE_PATTERN / CATEGORY_WORDS_PATTERN — navigation,
      promo and related-content text that must never pass as an ingredient.
    • INGREDIENT_SCOPES / INSTRUCTION_SCOPES — CSS selectors for recipe
      containers, known site patterns first, generic main/article last.
    • TITLE_SELECTORS / IMAGE_CONTAINER_SELECTOR — HTML fallback title/image.
    • STATE_VARIABLES / STATE_CONTAINER_KEYS — client-state hydration globals
      and the keys worth descending into when looking for a recipe.
    • NUTRITION_ALIASES — schema.org nutrition keys and their variants.

-------------------------------------------------------------------------------
Notes:
    • Phrase matching is case-insensitive substring matching; leading and
      trailing spaces inside the phrases are part of the match.
    • This module has no dependencies and may be safely imported anywhere.

===============================================================================
"""
import re

from mealrank.datasets import NutritionDbRow

NUTRITION_DB = (
    NutritionDbRow(("flour", "all-purpose flour", "all purpose flour", "plain flour"), "cup", 455, 13, 95, 1),
    NutritionDbRow(("sugar", "granulated sugar", "white sugar", "caster sugar"), "cup", 774, 0, 200, 0),
    NutritionDbRow(("brown sugar",), "cup", 828, 0, 214, 0),
    NutritionDbRow(("butter",), "cup", 1628, 2, 0, 184),
    NutritionDbRow(("milk", "whole milk", "full-fat milk"), "cup", 149, 8, 12, 8),
    NutritionDbRow(("skim milk", "skimmed milk", "fat-free milk"), "cup", 83, 8, 12, 0),
    NutritionDbRow(("egg", "eggs", "large egg", "large eggs"), "egg", 72, 6, 0, 5),
    NutritionDbRow(("cocoa powder", "unsweetened cocoa", "cocoa"), "cup", 196, 17, 47, 12),
    NutritionDbRow(("oil", "vegetable oil", "cooking oil", "olive oil", "canola oil", "rapeseed oil"), "cup", 1927, 0, 0, 218),
    NutritionDbRow(("baking powder",), "tsp", 5, 0, 1, 0),
    NutritionDbRow(("baking soda", "bicarbonate of soda", "bicarb"), "tsp", 0, 0, 0, 0),
    NutritionDbRow(("salt", "table salt", "sea salt", "kosher salt"), "tsp", 0, 0, 0, 0),
    NutritionDbRow(("vanilla extract", "vanilla", "vanilla essence"), "tsp", 12, 0, 1, 0),
    NutritionDbRow(("honey",), "cup", 1031, 0, 279, 0),
    NutritionDbRow(("maple syrup",), "cup", 840, 0, 216, 0),
    NutritionDbRow(("cornstarch", "corn starch", "cornflour"), "cup", 488, 0, 117, 0),
    NutritionDbRow(("oatmeal", "rolled oats", "oats", "old-fashioned oats"), "cup", 307, 11, 55, 5),
    NutritionDbRow(("rice", "white rice", "long-grain rice", "jasmine rice"), "cup", 242, 4, 53, 0),
    NutritionDbRow(("breadcrumbs", "bread crumbs", "panko"), "cup", 427, 15, 77, 6),
    NutritionDbRow(("cream cheese",), "cup", 792, 14, 8, 78),
    NutritionDbRow(("sour cream",), "cup", 492, 7, 9, 48),
    NutritionDbRow(("yogurt", "greek yogurt", "plain yogurt"), "cup", 149, 8, 11, 8),
    NutritionDbRow(("cream", "heavy cream", "double cream", "whipping cream"), "cup", 821, 5, 7, 88),
    NutritionDbRow(("parmesan", "parmesan cheese", "parmigiano"), "cup", 431, 28, 4, 29),
    NutritionDbRow(("cheddar", "cheddar cheese", "sharp cheddar"), "cup", 455, 28, 1, 37),
    NutritionDbRow(("mozzarella", "mozzarella cheese"), "cup", 336, 25, 3, 25),
    NutritionDbRow(("garlic", "garlic clove", "garlic cloves"), "clove", 4, 0, 1, 0),
    NutritionDbRow(("onion", "onions", "yellow onion", "white onion"), "cup", 64, 2, 15, 0),
    NutritionDbRow(("tomato", "tomatoes", "tomato puree", "tomato paste"), "cup", 32, 2, 7, 0),
    NutritionDbRow(("chicken broth", "chicken stock", "vegetable broth", "vegetable stock", "beef broth", "stock"), "cup", 39, 5, 1, 1),
    NutritionDbRow(("soy sauce",), "tbsp", 9, 1, 1, 0),
    NutritionDbRow(("vinegar", "white vinegar", "apple cider vinegar", "red wine vinegar"), "tbsp", 3, 0, 0, 0),
    NutritionDbRow(("mustard", "dijon mustard", "yellow mustard"), "tsp", 3, 0, 0, 0),
    NutritionDbRow(("mayonnaise", "mayo"), "tbsp", 94, 0, 0, 10),
    NutritionDbRow(("ketchup", "tomato ketchup"), "tbsp", 17, 0, 5, 0),
    NutritionDbRow(("peanut butter", "almond butter"), "tbsp", 94, 4, 3, 8),
    NutritionDbRow(("nuts", "almonds", "walnuts", "pecans", "cashews", "peanuts"), "cup", 523, 15, 21, 45),
    NutritionDbRow(("chocolate chips", "chocolate chunks", "dark chocolate chips"), "cup", 805, 9, 93, 51),
    NutritionDbRow(("coconut", "shredded coconut", "desiccated coconut"), "cup", 283, 3, 12, 27),
    NutritionDbRow(("lemon juice", "lime juice", "citrus juice"), "tbsp", 4, 0, 1, 0),
    NutritionDbRow(("olives",), "cup", 154, 1, 8, 15),
    NutritionDbRow(("spinach", "baby spinach", "leaf spinach"), "cup", 7, 1, 1, 0),
    NutritionDbRow(("lettuce", "romaine", "iceberg", "mixed greens"), "cup", 8, 1, 2, 0),
    NutritionDbRow(("carrot", "carrots"), "cup", 52, 1, 12, 0),
    NutritionDbRow(("celery",), "cup", 14, 1, 3, 0),
    NutritionDbRow(("bell pepper", "bell peppers", "pepper", "red pepper", "green pepper"), "cup", 46, 1, 9, 0),
    NutritionDbRow(("potato", "potatoes", "russet potato", "yukon gold"), "cup", 116, 2, 27, 0),
    NutritionDbRow(("black pepper", "ground pepper", "peppercorns"), "tsp", 6, 0, 2, 0),
    NutritionDbRow(("paprika", "smoked paprika"), "tsp", 6, 0, 1, 0),
    NutritionDbRow(("cumin", "ground cumin"), "tsp", 8, 0, 1, 0),
    NutritionDbRow(("cinnamon", "ground cinnamon"), "tsp", 6, 0, 2, 0),
    NutritionDbRow(("nutmeg", "ground nutmeg"), "tsp", 12, 0, 1, 1),
    NutritionDbRow(("oregano", "dried oregano", "fresh oregano"), "tsp", 3, 0, 1, 0),
    NutritionDbRow(("basil", "fresh basil", "dried basil"), "tsp", 1, 0, 0, 0),
    NutritionDbRow(("parsley", "fresh parsley", "dried parsley"), "tbsp", 1, 0, 0, 0),
    NutritionDbRow(("thyme", "fresh thyme", "dried thyme"), "tsp", 3, 0, 1, 0),
    NutritionDbRow(("rosemary", "fresh rosemary", "dried rosemary"), "tsp", 4, 0, 1, 0),
    NutritionDbRow(("gelatin", "gelatine"), "tbsp", 32, 8, 0, 0),
    NutritionDbRow(("corn syrup", "light corn syrup", "golden syrup"), "cup", 1031, 0, 279, 0),
    NutritionDbRow(("molasses",), "tbsp", 58, 0, 15, 0),
    NutritionDbRow(("raisins", "dried raisins"), "cup", 434, 5, 115, 1),
    NutritionDbRow(("cranberries", "dried cranberries", "craisins"), "cup", 123, 0, 33, 0),
    NutritionDbRow(("banana", "bananas"), "cup", 200, 2, 51, 1),
    NutritionDbRow(("apple", "apples"), "cup", 57, 0, 15, 0),
    NutritionDbRow(("water",), "cup", 0, 0, 0, 0),
)

# ---------- navigation / related-content denylist ----------
MAX_INGREDIENT_LENGTH = 100

NAV_PHRASES = (
    " or less",
    " or more",
    " days of",
    " that are",
    " that is",
    " tested",
    " reviewed",
    " video",
    " photo",
    " comforting",
    " surprise me",
    " highly rated",
    " more from",
    " related ",
    " categories",
    " sign up",
    " newsletter",
    " view shopping",
    " add to shopping",
    " ingredient substitution",
    " deselect all",
    "cook mode",
    "dismiss",
    " healthy meals",
    " easy chicken",
    " best ",
    " vacuum sealer",
    " air fryer",
    " coffeemaker",
    " pulled pork",
    " slow cooker",
    " recipe ",
    " recipes ",
    "recipe-",
    "recipes/",
)

# "7 Ingredients or Less", "12 Days of Cookies", "40 Minutes or Less", ...
LISTICLE_PATTERN = re.compile(r"^\d+\s+(ingredients?|recipes?|days?|minutes?|hours?)\s+(or|of|that)", re.I)

CATEGORY_WORDS_PATTERN = re.compile(r"^(recipes?|ingredients?|links?|photos?|videos?)$", re.I)

# ---------- HTML fallback selectors (Food Network first, generic last) ----------
INGREDIENT_SCOPES = (
    ".o-Ingredients__m-Body",
    ".o-Ingredients__a-List",
    "[class*='o-Ingredients']",
    ".ingredient-list",
    "[id*='ingredients']",
    "[class*='recipe-ingredients']",
    "[class*='RecipeIngredients']",
    "main [class*='ingredient']",
    "article [class*='ingredient']",
    "[role='main'] [class*='ingredient']",
)

INSTRUCTION_SCOPES = (
    ".o-Method__m-Body",
    ".o-AssetDescription__a-Body",
    "[class*='o-Method']",
    "[class*='o-AssetDescription']",
    ".recipe-instructions",
    "[class*='recipe-instructions']",
    "[class*='recipeSteps']",
    "[class*='recipe-steps']",
    "main [class*='instruction']",
    "main [class*='method']",
    "article [class*='instruction']",
    "article [class*='method']",
    "[role='main'] [class*='instruction']",
)

FALLBACK_LIST_ITEMS = "main li, article li"

# tried in order; the last one only counts inside article/main/[role=main]
TITLE_SELECTORS = (
    "h1",
    ".recipe-title",
    "[class*='recipe'][class*='title']",
    "[class*='RecipeTitle']",
)
SCOPED_TITLE_SELECTOR = "[class*='title']"
CONTENT_REGIONS = ("article", "main")

IMAGE_CONTAINER_SELECTOR = ".recipe-image img, [class*='recipe'] img, [class*='hero'] img, [class*='Recipe'] img"

MIN_INSTRUCTION_LENGTH = 15

# ---------- client-state hydration blobs ----------
STATE_VARIABLES = (
    "__INITIAL_STATE__",
    "__PRELOADED_STATE__",
    "__NEXT_DATA__",
    "__NUXT_DATA__",
    "__APOLLO_STATE__",
)

STATE_CONTAINER_KEYS = ("recipe", "recipeDetail", "pageProps", "data", "content", "initialState", "props")

# ---------- schema.org nutrition keys ----------
NUTRITION_ALIASES = {
    "calories": ("calories", "calorieContent"),
    "protein": ("proteinContent", "protein"),
    "carbs": ("carbohydrateContent", "carbohydrates", "carbohydrate"),
    "fat": ("fatContent", "fat"),
}
