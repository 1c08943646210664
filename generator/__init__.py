"""
Mobile App 產生器 (Generator)

forceios / forcedroid 的實作：收集 App 資訊後，
clone template repo、呼叫 cordova / npm / pod 等外部工具，
在「指定的輸出目錄」產生可編譯的 App 專案。

用法:
    forceios create
    forcedroid createWithTemplate --templaterepourl=<url>

會問你（命令列沒給的才問）：
    1. App 類型 (native, native_swift, react_native, hybrid_local, hybrid_remote)
       或 template repo url
    2. App 名稱 / package name / 組織名稱
    3. 起始頁面（僅 hybrid_remote）
    4. 輸出目錄
"""
