# --- RU ---
RUtexts = {
    "RU": {
        "welcome_lang_choice": "Здравствуйте, выберите язык\nHello, choose a language\n你好, 选择语言",
        "change_language": "🌐 Сменить язык",
        "board_title": "🧺 <b>SpinHub</b>\nWiesenmühlenstraße 7/9",
        "board_footer": "© 2026 Общежитие Wiesenmühlen",
        "machine_title": "СМ {id}",

        # Статусы
        "status_available": "Свободна",
        "status_in_use": "Занята",
        "status_out_of_order": "Не работает",

        # Подсказки под статусом
        "hint_ready": "Готова к работе",
        "hint_remaining": "осталось {time}",
        "hint_bonus": "{time} бонусного времени!",
        "hint_unavailable": "Временно недоступна",

        # Кнопки
        "btn_start": "Запустить",
        "btn_new_wash": "Новая стирка",
        "btn_use_bonus": "Бонус ({time})",
        "btn_finish_early": "Закончить раньше",
        "btn_report_broken": "Сообщить о поломке",
        "btn_fix": "Отметить исправной",
        "btn_refresh": "🔄 Обновить",
        "btn_cancel": "Отмена",
        "btn_reload": "Перезагрузить",

        # Запуск
        "duration_prompt": "Укажите длительность (мин) для СМ {id}.\nОтправьте число или выберите ниже:",
        "duration_minutes": "{minutes} мин",
        "machine_started": "✅ СМ {id} запущена на {minutes} мин.",

        # Ошибки
        "action_not_available": "Это действие больше недоступно для этой машины.",
        "unknown_machine": "Такой машины нет.",
        "error_title": "⚠️ <b>Что-то пошло не так.</b>",
        "error_details": "При отображении произошла ошибка.",
    }
}
