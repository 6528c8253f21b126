from aiogram.fsm.context import FSMContext
from app.config import config as cfg
from app.locales import ru, en, cn

ALL_TEXTS = {**ru.RUtexts, **en.ENtexts, **cn.CNtexts}


def get_texts(lang: str) -> dict:
    return ALL_TEXTS.get(lang) or ALL_TEXTS.get(cfg.DEFAULT_LANG) or ALL_TEXTS["ENG"]


async def get_lang_and_texts(state: FSMContext) -> tuple[str, dict]:
    data = await state.get_data()
    lang = data.get('lang', cfg.DEFAULT_LANG)
    return lang, get_texts(lang)
