"""Closed vocabularies offered by the dashboard form.

Member names are snake_case identifiers; values are the display strings the
form submits and the AI prompts embed verbatim.
"""

from enum import StrEnum

# ── Crops ───────────────────────────────────────────────────────────────────


class CropType(StrEnum):
    """Crops selectable as the planned crop or the previous crop."""

    rice = "Rice"
    wheat = "Wheat"
    corn = "Corn"
    barley = "Barley"
    sugarcane = "Sugarcane"
    cotton = "Cotton"
    soybean = "Soybean"
    potatoes = "Potatoes"
    mustard = "Mustard"
    sunflower = "Sunflower"
    groundnut = "Groundnut"
    jute = "Jute"
    tea = "Tea"
    coffee = "Coffee"
    rubber = "Rubber"
    coconut = "Coconut"
    millet = "Millet"
    sorghum = "Sorghum"
    finger_millet = "Finger Millet"
    chickpea = "Chickpea"
    pigeon_pea = "Pigeon Pea"
    lentil = "Lentil"
    black_gram = "Black Gram"
    green_gram = "Green Gram"
    tomato = "Tomato"
    onion = "Onion"
    brinjal = "Brinjal"
    cabbage = "Cabbage"
    cauliflower = "Cauliflower"
    okra = "Okra"
    spinach = "Spinach"
    carrot = "Carrot"
    radish = "Radish"
    chilli = "Chilli"
    capsicum = "Capsicum"
    ginger = "Ginger"
    turmeric = "Turmeric"
    garlic = "Garlic"
    mango = "Mango"
    banana = "Banana"
    guava = "Guava"
    papaya = "Papaya"
    apple = "Apple"
    grapes = "Grapes"
    orange = "Orange"
    lemon = "Lemon"
    castor = "Castor"
    safflower = "Safflower"
    linseed = "Linseed"
    tobacco = "Tobacco"
    sesame = "Sesame"
    fallow = "Fallow"


# ── Regions ─────────────────────────────────────────────────────────────────


class Region(StrEnum):
    """Indian states offered in the region selector."""

    andhra_pradesh = "Andhra Pradesh"
    arunachal_pradesh = "Arunachal Pradesh"
    assam = "Assam"
    bihar = "Bihar"
    chhattisgarh = "Chhattisgarh"
    goa = "Goa"
    gujarat = "Gujarat"
    haryana = "Haryana"
    himachal_pradesh = "Himachal Pradesh"
    jharkhand = "Jharkhand"
    karnataka = "Karnataka"
    kerala = "Kerala"
    madhya_pradesh = "Madhya Pradesh"
    maharashtra = "Maharashtra"
    manipur = "Manipur"
    meghalaya = "Meghalaya"
    mizoram = "Mizoram"
    nagaland = "Nagaland"
    odisha = "Odisha"
    punjab = "Punjab"
    rajasthan = "Rajasthan"
    sikkim = "Sikkim"
    tamil_nadu = "Tamil Nadu"
    telangana = "Telangana"
    tripura = "Tripura"
    uttar_pradesh = "Uttar Pradesh"
    uttarakhand = "Uttarakhand"
    west_bengal = "West Bengal"


# ── Languages ───────────────────────────────────────────────────────────────


class LanguageCode(StrEnum):
    """Supported UI and recommendation languages."""

    en = "en"
    hi = "hi"
    bho = "bho"
    bn = "bn"
    te = "te"
    mr = "mr"
    ta = "ta"
    ur = "ur"
    gu = "gu"
    kn = "kn"
    or_ = "or"
    ml = "ml"
    pa = "pa"


# ── Calculator units ────────────────────────────────────────────────────────


class YieldUnit(StrEnum):
    """Display unit pair of the revenue calculator."""

    tons_per_hectare = "t/ha"
    quintals_per_bigha = "q/bigha"
