# Prisma CLI release the bundled engines were built for
PRISMA_VERSION = '3.15.0'

# commit hash of the default engines shipped with PRISMA_VERSION
ENGINE_VERSION = '1c05d2fd02981d04d5367319e82f44e1c44ec0b7'

STUDIO_VERSION = '0.460.0'

# distribution name of the generated client package
CLIENT_DISTRIBUTION = 'prisma'

CLIENT_NOT_FOUND = 'Not found'
