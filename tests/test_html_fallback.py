from mealrank.html_fallback import (
    collect_scoped_ingredients,
    collect_scoped_instructions,
    extract_from_html,
    find_servings,
    find_title,
    og_image,
    og_title,
)

FOOD_NETWORK_STYLE = """
<html><head>
<meta property="og:image" content="//img.example.com/chili.jpg">
<meta property="og:title" content="Best Chili | Example">
</head><body>
<nav><ul><li>Home</li><li>30 Minutes or Less</li></ul></nav>
<main>
  <h1> Weeknight   Chili </h1>
  <p>Yield: 6 servings</p>
  <div class="o-Ingredients__m-Body">
    <ul>
      <li>1 cup onion, diced</li>
      <li>2 cloves garlic</li>
      <li>1 tbsp olive oil</li>
      <li>Deselect All</li>
    </ul>
  </div>
  <div class="o-Method__m-Body">
    <ol>
      <li>Heat the oil in a large pot over medium heat.</li>
      <li>Stir.</li>
      <li>Add the onion and garlic and cook until soft.</li>
    </ol>
  </div>
</main>
</body></html>
"""


def test_extract_from_html_food_network_layout(page):
    r = extract_from_html(page(FOOD_NETWORK_STYLE))
    assert r.name == "Weeknight Chili"
    assert [i.name for i in r.ingredients] == ["onion, diced", "garlic", "olive oil"]
    assert r.ingredients[1].unit == "cloves"
    assert r.ingredients[1].calories == 8
    assert r.instructions == (
        "Step 1: Heat the oil in a large pot over medium heat.\n\n"
        "Step 2: Add the onion and garlic and cook until soft."
    )
    assert r.images == ["https://img.example.com/chili.jpg"]
    assert r.servings == 6


def test_nav_menu_is_not_taken_as_ingredients(page, nav_menu_html):
    r = extract_from_html(page(nav_menu_html))
    assert r.ingredients is None
    assert r.name == "Our Kitchen"


def test_generic_main_list_items(page):
    html = """
    <html><body><article>
      <h2 class="post-title">Simple Dressing</h2>
      <ul><li>3 tbsp olive oil</li><li>1 tbsp vinegar</li><li>1 tsp mustard</li></ul>
    </article></body></html>
    """
    doc = page(html)
    assert collect_scoped_ingredients(doc.soup) == ["3 tbsp olive oil", "1 tbsp vinegar", "1 tsp mustard"]
    assert find_title(doc.soup) == "Simple Dressing"


def test_title_outside_content_region_ignored(page):
    html = '<html><body><div class="site-title">My Blog</div><p>hello</p></body></html>'
    assert find_title(page(html).soup) is None


def test_instructions_fall_back_to_paragraphs(page):
    html = """
    <html><body><div class="recipe-instructions">
      <p>Preheat the oven to 350 degrees.</p>
      <p>Enjoy!</p>
    </div></body></html>
    """
    assert collect_scoped_instructions(page(html).soup) == ["Preheat the oven to 350 degrees."]


def test_open_graph_helpers(page):
    soup = page(FOOD_NETWORK_STYLE).soup
    assert og_image(soup) == "https://img.example.com/chili.jpg"
    assert og_title(soup) == "Best Chili | Example"
    bare = page("<html><body></body></html>").soup
    assert og_image(bare) is None
    assert og_title(bare) is None


def test_find_servings(page):
    assert find_servings(page("<p>Makes: about 12</p>").soup) == 12
    assert find_servings(page("<p>Servings 0</p>").soup) is None
    assert find_servings(page("<p>no count here</p>").soup) is None


def test_find_servings_ignores_head(page):
    html = ("<html><head><title>Serves 8 | Dinner Blog</title></head>"
            "<body><p>Yield: 4 bowls</p></body></html>")
    assert find_servings(page(html).soup) == 4
    html = "<html><head><title>Serves 8 | Dinner Blog</title></head><body><p>Enjoy.</p></body></html>"
    assert find_servings(page(html).soup) is None
