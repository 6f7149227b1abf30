import math
from densematrix import Matrix, matrix

# rotate a vector by pi
transformation = matrix([math.cos(math.pi), -math.sin(math.pi)], [math.sin(math.pi), math.cos(math.pi)])
vector = matrix([4.0], [2.0])
transformed_vector = transformation.multiplication(vector)
print(transformed_vector)

identity_matrix = Matrix.identity(3, 'int32')
print(identity_matrix.size())
print(identity_matrix)

b = transformed_vector.transpose()
print(b)
