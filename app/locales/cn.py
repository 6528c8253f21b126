# --- Китайский СЛОВАРЬ ЛОКАЛИЗАЦИИ ---
CNtexts = {
    "CN": {
        "welcome_lang_choice": "Здравствуйте, выберите язык\nHello, choose a language\n你好, 选择语言",
        "change_language": "🌐 更改语言",
        "board_title": "🧺 <b>SpinHub</b>\nWiesenmühlenstraße 7/9",
        "board_footer": "© 2026 Wiesenmühlen 宿舍",
        "machine_title": "洗衣机 {id}",

        # --- 状态 ---
        "status_available": "空闲",
        "status_in_use": "使用中",
        "status_out_of_order": "故障",

        "hint_ready": "可以使用",
        "hint_remaining": "剩余 {time}",
        "hint_bonus": "{time} 奖励时间可用!",
        "hint_unavailable": "暂时不可用",

        # --- 按钮 ---
        "btn_start": "启动",
        "btn_new_wash": "新的洗涤",
        "btn_use_bonus": "使用奖励 ({time})",
        "btn_finish_early": "提前结束",
        "btn_report_broken": "报告故障",
        "btn_fix": "标记为已修复",
        "btn_refresh": "🔄 刷新",
        "btn_cancel": "取消",
        "btn_reload": "重新加载",

        "duration_prompt": "设置洗衣机 {id} 的时长(分钟)。\n发送数字或在下方选择:",
        "duration_minutes": "{minutes} 分钟",
        "machine_started": "✅ 洗衣机 {id} 已启动 {minutes} 分钟。",

        # --- 错误 ---
        "action_not_available": "此操作对该机器不再可用。",
        "unknown_machine": "该机器不存在。",
        "error_title": "⚠️ <b>出了点问题。</b>",
        "error_details": "应用在显示时遇到错误。",
    }
}
