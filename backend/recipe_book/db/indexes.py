# 컬렉션 인덱스 생성
# 앱 스타트업에서 한 번 ensure_indexes(db)를 await로 호출한다.

RECIPES = "recipes"
CUISINES = "cuisines"
TAGS = "tags"

async def ensure_indexes(db) -> None:
    # 참조 컬렉션: 이름으로 조회/검증하므로 unique
    await db[CUISINES].create_index("name", unique=True)
    await db[TAGS].create_index("name", unique=True)

    # 레시피 검색 필터용
    recipes = db[RECIPES]
    await recipes.create_index("name")
    await recipes.create_index("cuisine.name")
    await recipes.create_index("tags.name")
    await recipes.create_index("ingredients.name")

    # 리뷰 수정/삭제 시 배열 원소 매칭
    await recipes.create_index("reviews.review_id")
