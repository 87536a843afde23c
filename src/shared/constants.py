# --- Лимиты построения изолиний/изополос
# Максимальное число узлов сетки (width*height) на один запрос
MAX_GRID_CELLS = 25_000_000
# Количество параллельных воркеров для обработки порогов
CONTOUR_PARALLEL_WORKERS = 4
# Минимальное число порогов, при котором включается параллельная обработка
CONTOUR_PARALLEL_MIN_THRESHOLDS = 2
# Логировать потребление памяти до и после построения
CONTOUR_LOG_MEMORY = False
# Начиная с этого числа ячеек x порогов прогон считается «большим»
# и память логируется независимо от настройки
CONTOUR_LOG_MEMORY_MIN_WORK = 5_000_000

# --- Геометрия marching-ячейки (в долях размера ячейки)
# Полуширина ячейки: ячейка занимает [-1/2, 1/2] вокруг опорной точки
CELL_HALF_EXTENT = 0.5
# Смещение точек 1/3 и 2/3 ребра от его середины
CELL_THIRD_OFFSET = 1 / 6
# Максимум отрезков изолинии на ячейку (седло)
MAX_SEGMENTS_PER_CELL = 2
# Максимум вершин изополосы на ячейку (восьмиугольник)
MAX_VERTICES_PER_CELL = 8

# --- Профиль настроек
# Имя файла настроек по умолчанию
SETTINGS_FILE_NAME = 'contours.toml'

# Availability flags for optional libs
PSUTIL_AVAILABLE = True

# --- OOM Prevention ---
# Доля доступной RAM, которую можно использовать
MEMORY_SAFETY_RATIO = 0.75
# Минимум свободной памяти, которую нужно оставить (МБ)
MEMORY_MIN_FREE_MB = 512
