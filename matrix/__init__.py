"""
forceios / forcedroid 測試矩陣

對選定的作業系統與 app type 組合，逐一產生 App 並呼叫原生建置工具，
確認 template 與 plugin 產出的專案都能編譯。
"""
